PITCH_PROMPT_VERSION = "pitch_v2"

# (narrative step, gradient classes, icon, accent colour, headline)
SLIDE_THEMES = (
    ("Problem", "from-slate-900 via-purple-900 to-slate-900", "🔥", "purple", "THE PROBLEM"),
    ("Solution", "from-blue-900 via-indigo-900 to-purple-900", "💡", "blue", "OUR SOLUTION"),
    ("Market", "from-emerald-900 via-teal-900 to-cyan-900", "📈", "emerald", "MARKET"),
    ("Call to Action", "from-rose-900 via-pink-900 to-purple-900", "🚀", "rose", "LET'S BUILD"),
)


def _example_slide(gradient: str, icon: str, accent: str, headline: str, body: str) -> str:
    return (
        f"<section class='min-h-screen bg-gradient-to-br {gradient} text-white p-12 flex flex-col "
        "justify-center items-center relative overflow-hidden'>"
        "<div class='absolute inset-0 bg-black/20'></div>"
        "<div class='relative z-10 text-center max-w-6xl mx-auto'>"
        f"<div class='text-6xl mb-6'>{icon}</div>"
        f"<h1 class='text-7xl md:text-8xl font-black mb-8 bg-gradient-to-r from-white to-{accent}-200 "
        f"bg-clip-text text-transparent leading-tight'>{headline}</h1>"
        f"<p class='text-2xl md:text-3xl text-{accent}-100 font-light leading-relaxed mb-8'>{body}</p>"
        f"<div class='w-24 h-1 bg-gradient-to-r from-{accent}-400 to-{accent}-300 mx-auto rounded-full'></div>"
        "</div></section>"
    )


_THEME_LINES = "\n".join(
    f"- Slide {index} ({step}): {gradient}"
    for index, (step, gradient, _, _, _) in enumerate(SLIDE_THEMES, start=1)
)

_EXAMPLE_SLIDES = ",\n".join(
    f'    "{_example_slide(gradient, icon, accent, headline, f"{step} description here")}"'
    for step, gradient, icon, accent, headline in SLIDE_THEMES
)

SYSTEM_PROMPT = f"""You are a professional pitch deck designer and startup advisor.
Given a startup idea, create a compelling pitch with:
1. A catchy, memorable company name (3 words max)
2. A clear, compelling one-sentence elevator pitch
3. Exactly 4 HTML slides for a pitch deck with modern, professional design

Each slide must be valid HTML with Tailwind CSS classes:
- Professional gradient backgrounds
- Bold typography with clear hierarchy
- Unicode icons as visual elements (🚀, 💡, 📈, 🎯, 💰, 🌟, ⚡, 🔥, 💎, 🏆)
- Generous spacing and high contrast for readability

Slides must follow this order: Problem, Solution, Market/Business Model, Call to Action.

Use exactly these gradients:
{_THEME_LINES}

Return ONLY valid JSON in this exact format:
{{
  "name": "Company Name",
  "elevator": "One sentence elevator pitch that clearly explains the value proposition.",
  "slides": [
{_EXAMPLE_SLIDES}
  ]
}}

Use single quotes for HTML attributes so the JSON stays valid."""

USER_PROMPT_TEMPLATE = "Create a pitch for this startup idea: {idea}"
