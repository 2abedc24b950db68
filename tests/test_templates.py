from ideaforge.backend.templates import (
    default_file_structure,
    derive_summary,
    render_file_tree,
    render_quick_template,
    render_template,
)


def test_summary_prefers_elevator():
    assert derive_summary("Idea one. Idea two.", {"elevator": "  Uber for dogs.  "}) == "Uber for dogs."


def test_summary_uses_first_sentence():
    assert derive_summary("Find classes nearby. Pay later.") == "Find classes nearby."


def test_summary_skips_leading_empty_sentences():
    assert derive_summary("...Real start here") == "Real start here."


def test_summary_ignores_non_string_elevator():
    assert derive_summary("Find classes nearby", {"elevator": 42}) == "Find classes nearby."


def test_file_tree_rendering():
    tree = render_file_tree({"src/": ["a.js", "b.js"], "README.md": None})
    assert tree.splitlines() == [
        "project-root/",
        "├── src/",
        "│   ├── a.js",
        "│   └── b.js",
        "└── README.md",
    ]


def test_default_structure_shape():
    structure = default_file_structure()
    assert set(structure) >= {"client/", "server/", "package.json", "README.md"}
    assert structure["package.json"] is None


def test_full_template_sections(fitness_idea):
    prompt = render_template(
        fitness_idea,
        {"name": "FitFinder"},
        ["MongoDB", "Stripe"],
        ["Search & Discovery"],
        "Book classes nearby.",
    )
    assert prompt.startswith("# FitFinder - Complete MERN Stack Development Guide")
    assert f"**Original Idea:** {fitness_idea}" in prompt
    assert "- Stripe" in prompt
    assert "- Implement Search & Discovery" in prompt
    assert "10. Prepare the production build" in prompt
    assert "project-root/" in prompt
    assert prompt.rstrip().endswith("production-ready code.")


def test_full_template_defaults_company_name(fitness_idea):
    prompt = render_template(fitness_idea, None, [], [], "x")
    assert prompt.startswith("# YourStartup - ")


def test_quick_template(fitness_idea):
    prompt = render_quick_template(fitness_idea, {"name": "FitFinder", "elevator": "Classes, booked."})
    assert prompt.startswith("# FitFinder - MERN Stack Development")
    assert f"Build a modern web application for: {fitness_idea}" in prompt
    assert "Pitch: Classes, booked." in prompt
    assert "## API Endpoints" in prompt


def test_renderers_are_deterministic(fitness_idea):
    context = {"name": "FitFinder", "elevator": "Classes, booked.", "slides": ["<p>a</p>"]}
    args = (fitness_idea, context, ["MongoDB", "React"], ["Search & Discovery"], "Book classes.")

    assert render_template(*args) == render_template(*args)
    assert render_quick_template(fitness_idea, context) == render_quick_template(fitness_idea, context)
    assert derive_summary(fitness_idea, context) == derive_summary(fitness_idea, context)


def test_renderers_ignore_malformed_context_values(fitness_idea):
    odd_contexts = [
        None,
        {},
        {"name": 42, "elevator": ["not", "text"], "slides": "nope"},
        {"name": None, "elevator": {"nested": True}},
        {"name": "   ", "elevator": "   "},
    ]
    for context in odd_contexts:
        full = render_template(fitness_idea, context, [], [], derive_summary(fitness_idea, context))
        quick = render_quick_template(fitness_idea, context)

        assert full.startswith("# YourStartup - Complete MERN Stack Development Guide")
        assert quick.startswith("# YourStartup - MERN Stack Development")
        assert "Pitch:" not in quick
        assert derive_summary(fitness_idea, context) == fitness_idea + "."
