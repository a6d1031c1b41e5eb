from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response


class AccountError(Exception):
    """Base class for user/role management failures."""


class UserAlreadyExists(AccountError):
    def __init__(self, username: str):
        super().__init__(f"user {username!r} already exists")
        self.username = username


class UserNotFound(AccountError):
    def __init__(self, username: str):
        super().__init__(f"user {username!r} not found")
        self.username = username


class RoleAlreadyExists(AccountError):
    def __init__(self, name: str):
        super().__init__(f"role {name!r} already exists")
        self.name = name


class RoleNotFound(AccountError):
    def __init__(self, name: str):
        super().__init__(f"role {name!r} not found")
        self.name = name


class PasswordMismatch(AccountError):
    def __init__(self):
        super().__init__("passwords do not match")


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        # Let Django's 500 handling take over for unexpected errors.
        return None
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    code = getattr(exc, 'default_code', None) or 'api_error'
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
