"""User login — login, logout and password reset as virtual pages.

Three URLs with no stored content share one query var. The theme may
provide a template per action; otherwise the plugin's bundled login
template is used. Logging out happens during request parsing, before any
template is chosen.

Try it::

    from app import host
    response = host.handle("/login/forgot-password")
    print(response.template)
"""

from pathlib import Path

from mirage import (
    ParsedRequest,
    SandboxConfig,
    VirtualPage,
    VirtualPageRegistry,
    bind,
    get_query_var,
    locate_template,
    trigger_404,
)
from mirage.sandbox import SandboxHost

HERE = Path(__file__).parent
PLUGIN_TEMPLATES = HERE / "templates"
THEME_TEMPLATES = HERE / "theme"

ACTIONS = ("login", "logout", "forgot_password")

# Stand-in for the session store
SESSIONS: dict[str, str] = {"current": "ada"}


class UserLoginPage(VirtualPage):
    def get_name(self) -> str:
        return "user_login"

    def get_rewrite_rules(self):
        return [
            {"regex": "^login/?$", "query": "index.php?user_login=login"},
            {"regex": "^logout/?$", "query": "index.php?user_login=logout"},
            {"regex": "^login/forgot-password/?$", "query": "index.php?user_login=forgot_password"},
        ]

    def get_query_vars(self):
        return ["user_login"]

    def parse_request(self, request: ParsedRequest) -> None:
        if request.get("user_login") == "logout":
            SESSIONS.pop("current", None)

    def template_include(self, template: str) -> str:
        action = get_query_var("user_login")
        if not action:
            return template
        if action not in ACTIONS:
            trigger_404(f"Unknown login action {action!r}")

        found = locate_template(f"page-user-{action}.html", "page-user-login.html")
        if found:
            return found
        return str(PLUGIN_TEMPLATES / "page-user-login.html")


registry = VirtualPageRegistry()
registry.register_virtual_pages({"user_login": UserLoginPage})

host = SandboxHost(SandboxConfig(template_dirs=(THEME_TEMPLATES,)))
bind(registry, host)
