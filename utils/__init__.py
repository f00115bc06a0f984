# Utility modules for the family recipes API
from .sanitizer import sanitize_text, sanitize_line, sanitize_url
from .auth import Identity, issue_token, decode_token, login_required, admin_required
