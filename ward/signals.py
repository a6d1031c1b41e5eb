import logging

from django.contrib.auth.signals import user_logged_in, user_login_failed, user_logged_out
from django.dispatch import receiver

logger = logging.getLogger(__name__)


def _client_ip(request) -> str | None:
    return request.META.get('REMOTE_ADDR') if request is not None else None


@receiver(user_logged_in)
def log_login(sender, request, user, **kwargs):
    logger.info("login ok user=%s ip=%s", user.get_username(), _client_ip(request))


@receiver(user_login_failed)
def log_login_failure(sender, credentials, request=None, **kwargs):
    # credentials are already scrubbed of the password by django.contrib.auth
    logger.warning("login failed user=%s ip=%s", credentials.get('username'), _client_ip(request))


@receiver(user_logged_out)
def log_logout(sender, request, user, **kwargs):
    if user is not None:
        logger.info("logout user=%s", user.get_username())
