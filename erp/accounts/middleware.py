"""
accounts/middleware.py
──────────────────────
Attach an AuthContext to every request as ``request.auth``.

Must sit after django.contrib.auth's AuthenticationMiddleware in
settings.MIDDLEWARE, since the context reads ``request.user``.
"""

from .context import AuthContext


class AuthContextMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth = AuthContext(request)
        return self.get_response(request)
