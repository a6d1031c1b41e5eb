"""
Route based access control.

Access is governed by :data:`ACCESS_RULES`, an ordered table of
``(path pattern, requirement)`` pairs evaluated top to bottom; the first
matching pattern decides.  Keep the more specific patterns first and the
``/**`` catch-all last.

Patterns use ant-style wildcards: ``*`` matches within one path segment and
a trailing ``/**`` matches the prefix itself plus anything below it.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied

PERMIT_ALL = 'permitAll'
AUTHENTICATED = 'authenticated'

ROLE_ADMIN = 'ADMIN'
ROLE_USER = 'USER'


class Decision(enum.Enum):
    ALLOW = 'allow'
    LOGIN_REQUIRED = 'login_required'
    FORBIDDEN = 'forbidden'


def _compile(pattern: str) -> re.Pattern:
    suffix = ''
    if pattern.endswith('/**'):
        pattern, suffix = pattern[:-3], '(?:/.*)?'
    parts = []
    for token in re.split(r'(\*\*|\*)', pattern):
        if token == '**':
            parts.append('.*')
        elif token == '*':
            parts.append('[^/]*')
        else:
            parts.append(re.escape(token))
    return re.compile(''.join(parts) + suffix + r'\Z')


@dataclass(frozen=True)
class AccessRule:
    pattern: str
    requirement: str
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'regex', _compile(self.pattern))

    def matches(self, path: str) -> bool:
        return self.regex.match(path) is not None


ACCESS_RULES: tuple[AccessRule, ...] = (
    AccessRule('/login', PERMIT_ALL),
    AccessRule('/static/**', PERMIT_ALL),
    AccessRule('/notAuthorized', PERMIT_ALL),
    AccessRule('/', PERMIT_ALL),
    AccessRule('/api/healthz', PERMIT_ALL),
    AccessRule('/metrics', PERMIT_ALL),
    # delete, editPatient, save and formPatients
    AccessRule('/admin/**', ROLE_ADMIN),
    AccessRule('/console/**', ROLE_ADMIN),
    AccessRule('/**', AUTHENTICATED),
)


def find_rule(path: str, rules=ACCESS_RULES) -> AccessRule | None:
    for rule in rules:
        if rule.matches(path):
            return rule
    return None


def user_has_role(user, role: str) -> bool:
    """Check the role against the stored role set, never a cached claim."""
    if not (user and user.is_authenticated):
        return False
    return role in user.role_names()


def authorize(path: str, user, rules=ACCESS_RULES) -> Decision:
    """Decide whether ``user`` may request ``path``.

    Paths that no rule matches are denied to anonymous users and allowed to
    authenticated ones.
    """
    rule = find_rule(path, rules)
    requirement = rule.requirement if rule else AUTHENTICATED
    if requirement == PERMIT_ALL:
        return Decision.ALLOW
    if not (user and user.is_authenticated):
        return Decision.LOGIN_REQUIRED
    if requirement == AUTHENTICATED or user_has_role(user, requirement):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def role_required(role: str):
    """View decorator raising ``PermissionDenied`` unless the user holds ``role``.

    The middleware already enforces the rule table; this keeps the view safe
    if it is ever routed under another prefix.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            user = getattr(request, 'user', None)
            if not (user and user.is_authenticated):
                return redirect_to_login(request.get_full_path())
            if not user_has_role(user, role):
                raise PermissionDenied(f'{role} role required')
            return view(request, *args, **kwargs)
        return wrapper
    return decorator
