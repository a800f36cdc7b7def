"""Path classification used by the session middleware."""

AUTH_PREFIX = "/auth"
LOGIN_PATH = "/auth/login"
DASHBOARD_PATH = "/dashboard"

# Framework-internal and image-optimisation paths
EXEMPT_PATHS = frozenset({"/health", "/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json", "/favicon.ico"})
EXEMPT_PREFIXES = ("/static/", "/images/")
ASSET_EXTENSIONS = (
    ".css",
    ".js",
    ".map",
    ".ico",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".webp",
    ".avif",
    ".woff",
    ".woff2",
    ".txt",
)


def is_auth_path(path: str) -> bool:
    """Whether the path belongs to the auth zone, reachable without a session."""
    return path.startswith(AUTH_PREFIX)


def is_middleware_exempt(path: str) -> bool:
    """Whether the path skips the session middleware entirely."""
    if path in EXEMPT_PATHS:
        return True
    if path.startswith(EXEMPT_PREFIXES):
        return True
    return path.lower().endswith(ASSET_EXTENSIONS)
