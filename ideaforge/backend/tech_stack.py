from typing import List, Sequence, Tuple


BASE_STACK = ("MongoDB", "Express.js", "React", "Node.js", "Tailwind CSS")
CLOSING_STACK = ("Swagger/OpenAPI", "Vite", "ESLint", "Prettier")

# (keywords, technologies) scanned in order; one hit per family is enough.
KEYWORD_FAMILIES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("login", "user", "account"), ("JWT", "bcrypt")),
    (("pay", "subscription", "purchase"), ("Stripe",)),
    (("chat", "live", "real-time"), ("Socket.io",)),
    (("upload", "photo", "image"), ("Multer", "Cloudinary")),
    (("email", "notification"), ("Nodemailer",)),
)


def dedupe(items: Sequence[str]) -> List[str]:
    seen = set()
    unique: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique


def infer_tech_stack(idea: str, extra_text: str = "") -> List[str]:
    """Recommend technologies for an idea by keyword matching.

    The default stack always comes first and the documentation/tooling set
    always comes last; matched families sit in between in scan order.
    """
    text = f"{idea or ''} {extra_text or ''}".lower()
    stack: List[str] = list(BASE_STACK)
    for keywords, technologies in KEYWORD_FAMILIES:
        if any(keyword in text for keyword in keywords):
            stack.extend(technologies)
    stack.extend(CLOSING_STACK)
    return dedupe(stack)
