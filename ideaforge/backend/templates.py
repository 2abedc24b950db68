"""Deterministic scaffolding-prompt templates.

These renderers are the guaranteed fallback when remote generation is
unavailable, so they are pure and never raise for well-typed input: unknown
or malformed pitch-context values are simply ignored.
"""

from typing import Any, Dict, List, Optional, Sequence


DEFAULT_COMPANY_NAME = "YourStartup"
SUMMARY_FALLBACK_CHARS = 150


def default_file_structure() -> Dict[str, Any]:
    """Nested layout: directories map to dicts or lists, files map to ``None``."""
    return {
        "client/": {
            "public/": ["index.html", "favicon.ico"],
            "src/": {
                "components/": ["Header.jsx", "Footer.jsx", "Layout.jsx"],
                "pages/": ["Home.jsx", "Login.jsx", "Dashboard.jsx"],
                "services/": ["api.js", "auth.js"],
                "utils/": ["helpers.js", "constants.js"],
                "hooks/": ["useAuth.js", "useApi.js"],
                "context/": ["AuthContext.jsx"],
            },
            "package.json": None,
            "vite.config.js": None,
            "tailwind.config.js": None,
        },
        "server/": {
            "routes/": ["auth.js", "users.js", "api.js"],
            "models/": ["User.js", "Data.js"],
            "middleware/": ["auth.js", "validation.js"],
            "services/": ["database.js", "email.js"],
            "utils/": ["helpers.js", "validators.js"],
            "config/": ["database.js", "environment.js"],
        },
        "package.json": None,
        "README.md": None,
        ".env.example": None,
    }


def render_file_tree(structure: Dict[str, Any], root: str = "project-root/") -> str:
    lines = [root]

    def _walk(node: Any, prefix: str) -> None:
        if isinstance(node, dict):
            entries = list(node.items())
        elif isinstance(node, list):
            entries = [(str(child), None) for child in node]
        else:
            return
        for index, (name, child) in enumerate(entries):
            last = index == len(entries) - 1
            lines.append(f"{prefix}{'└── ' if last else '├── '}{name}")
            _walk(child, prefix + ("    " if last else "│   "))

    _walk(structure, "")
    return "\n".join(lines)


def _context_value(context: Optional[Dict[str, Any]], key: str) -> str:
    if not isinstance(context, dict):
        return ""
    value = context.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def derive_summary(idea: str, context: Optional[Dict[str, Any]] = None) -> str:
    elevator = _context_value(context, "elevator")
    if elevator:
        return elevator

    idea = (idea or "").strip()
    for sentence in idea.split("."):
        if sentence.strip():
            return sentence.strip() + "."
    if len(idea) > SUMMARY_FALLBACK_CHARS:
        return idea[:SUMMARY_FALLBACK_CHARS] + "..."
    return idea


def _bullets(items: Sequence[str], prefix: str = "") -> str:
    return "\n".join(f"- {prefix}{item}" for item in items)


def render_template(
    idea: str,
    context: Optional[Dict[str, Any]],
    tech_stack: Sequence[str],
    features: Sequence[str],
    summary: str,
) -> str:
    company = _context_value(context, "name") or DEFAULT_COMPANY_NAME
    tree = render_file_tree(default_file_structure())

    sections: List[str] = [
        f"# {company} - Complete MERN Stack Development Guide",
        "## Project Overview\n"
        f"{summary}\n\n"
        f"**Original Idea:** {idea}",
        "## Project Requirements\n\n"
        "### Core Features\n"
        f"{_bullets(features)}\n\n"
        "### Technology Stack\n"
        f"{_bullets(tech_stack)}",
        "## 1. Project Structure\n"
        "Create a full-stack application with the following layout:\n\n"
        f"```\n{tree}\n```",
        "## 2. Backend\n\n"
        "### Database Models (MongoDB/Mongoose)\n"
        "- User accounts and profiles\n"
        "- Core domain entities derived from the idea\n"
        "- Relationships and indexes between entities\n\n"
        "### API Endpoints\n"
        "- `POST /api/auth/register` - create an account\n"
        "- `POST /api/auth/login` - obtain a session token\n"
        "- `GET /api/auth/profile` - current user profile\n"
        "- Resource endpoints for each core feature\n\n"
        "### Authentication & Security\n"
        "- JWT-based authentication with bcrypt password hashing\n"
        "- Input validation and sanitization on every route\n"
        "- CORS configuration and rate limiting",
        "## 3. Frontend\n\n"
        "### Components\n"
        "- Responsive, accessible components composed from small building blocks\n"
        "- Error boundaries around route-level pages\n\n"
        "### State Management\n"
        "- React Context for session and global state\n"
        "- Custom hooks for data fetching, with loading and error states\n\n"
        "### Styling\n"
        "- Mobile-first layout with Tailwind CSS\n"
        "- A consistent design system shared across pages",
        "## 4. Feature Implementation\n"
        f"{_bullets(features, prefix='Implement ')}",
        "## 5. Environment Variables\n"
        "- `MONGODB_URI` - database connection string\n"
        "- `JWT_SECRET` - token signing secret\n"
        "- `PORT` - API server port\n"
        "- `CLIENT_URL` - allowed frontend origin\n"
        "- Third-party API keys required by the features above",
        "## 6. Dependencies\n\n"
        "**Frontend:**\n"
        "```bash\n"
        "npm create vite@latest client -- --template react\n"
        "npm install axios react-router-dom\n"
        "npm install -D tailwindcss postcss autoprefixer\n"
        "```\n\n"
        "**Backend:**\n"
        "```bash\n"
        "npm install express mongoose cors helmet bcryptjs jsonwebtoken dotenv\n"
        "npm install -D nodemon\n"
        "```",
        "## 7. Build Order\n"
        "1. Create the project structure\n"
        "2. Configure the development environment\n"
        "3. Implement authentication\n"
        "4. Build the core backend API\n"
        "5. Create the frontend pages and components\n"
        "6. Connect the frontend to the API\n"
        "7. Add the remaining features\n"
        "8. Add error handling and input validation\n"
        "9. Write unit, integration and end-to-end tests\n"
        "10. Prepare the production build",
        "## 8. Production Readiness\n"
        "- Environment-specific configuration\n"
        "- Database indexes and query optimization\n"
        "- Security hardening and dependency audits\n"
        "- Structured error logging and monitoring\n"
        "- Backups for persistent data",
        "Generate this complete application with clean, documented, production-ready code.",
    ]
    return "\n\n".join(sections)


def render_quick_template(idea: str, context: Optional[Dict[str, Any]] = None) -> str:
    company = _context_value(context, "name") or DEFAULT_COMPANY_NAME
    elevator = _context_value(context, "elevator")
    overview = f"Build a modern web application for: {idea}"
    if elevator:
        overview += f"\n\nPitch: {elevator}"

    sections = [
        f"# {company} - MERN Stack Development",
        f"## Project Overview\n{overview}",
        "## Tech Stack\n"
        "- Frontend: React + Vite + Tailwind CSS\n"
        "- Backend: Node.js + Express\n"
        "- Database: MongoDB + Mongoose\n"
        "- Auth: JWT tokens",
        "## Key Features\n"
        "- User authentication & profiles\n"
        "- Core business logic\n"
        "- Responsive design\n"
        "- API integration\n"
        "- Data management",
        "## Database Schema\n"
        "```javascript\n"
        "// User\n"
        "{ name: String, email: String, password: String (hashed), createdAt: Date }\n\n"
        "// Main entity (adapt to the idea)\n"
        "{ title: String, description: String, userId: ObjectId, createdAt: Date }\n"
        "```",
        "## API Endpoints\n"
        "- POST /api/auth/register\n"
        "- POST /api/auth/login\n"
        "- GET /api/user/profile\n"
        "- GET /api/data\n"
        "- POST /api/data\n"
        "- PUT /api/data/:id\n"
        "- DELETE /api/data/:id",
        "## Frontend Structure\n"
        "```\n"
        "src/\n"
        "├── components/\n"
        "│   ├── Auth/\n"
        "│   ├── Dashboard/\n"
        "│   └── Common/\n"
        "├── pages/\n"
        "├── services/\n"
        "└── hooks/\n"
        "```",
        "## Setup Instructions\n"
        "1. Create the project structure\n"
        "2. Install dependencies\n"
        "3. Set up environment variables\n"
        "4. Configure the database connection\n"
        "5. Implement authentication\n"
        "6. Build the core features\n"
        "7. Add styling and responsive design",
        "Generate production-ready code with error handling, validation, and modern best practices.",
    ]
    return "\n\n".join(sections)
