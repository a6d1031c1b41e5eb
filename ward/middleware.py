import logging

from django.contrib.auth.views import redirect_to_login
from django.http import JsonResponse
from django.shortcuts import render

from .permissions import ACCESS_RULES, Decision, authorize

logger = logging.getLogger(__name__)


class AccessRuleMiddleware:
    """Apply the ordered access rule table to every request.

    Anonymous users hitting a protected page are redirected to the login
    form; authenticated users lacking the required role get the fixed
    not-authorized page with status 403.  Under ``/api/`` both outcomes are
    JSON errors instead.
    """
    API_PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response
        self.rules = ACCESS_RULES

    def __call__(self, request):
        path = request.path_info or '/'
        decision = authorize(path, request.user, self.rules)
        if decision is Decision.LOGIN_REQUIRED:
            if path.startswith(self.API_PREFIX):
                return JsonResponse(
                    {'ok': False, 'error': {'code': 'not_authenticated', 'message': 'Authentication required.'}},
                    status=401,
                )
            return redirect_to_login(request.get_full_path())
        if decision is Decision.FORBIDDEN:
            logger.warning("access denied user=%s path=%s", request.user.get_username(), path)
            if path.startswith(self.API_PREFIX):
                return JsonResponse(
                    {'ok': False, 'error': {'code': 'permission_denied', 'message': 'Not authorized.'}},
                    status=403,
                )
            return render(request, 'ward/notAuthorized.html', status=403)
        return self.get_response(request)
