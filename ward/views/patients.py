"""
Patient CRUD pages.

Listing is open to any authenticated user; creating, editing, saving and
deleting require the ADMIN role.  After every mutation the admin is sent
back to the list page they came from, with ``page`` and ``keyword``
preserved.
"""
from __future__ import annotations

import logging
from urllib.parse import urlencode

from django.core.exceptions import ValidationError as ModelValidationError
from django.http import Http404, HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from ward.models import Patient
from ward.permissions import ROLE_ADMIN, role_required
from ward.serializers.patient import PatientListQuerySerializer, PatientSerializer
from ward.services import patients

logger = logging.getLogger(__name__)

LIST_TEMPLATE = 'ward/patients.html'
FORM_TEMPLATE = 'ward/formPatients.html'
_FORM_NAMES = {'birth_date': 'birthDate'}


def _int_param(params, name: str, default: int | None = None) -> int | None:
    raw = (params.get(name) or '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer') from None


def _list_url(page, keyword) -> str:
    return '/user/index?' + urlencode({'page': page, 'keyword': keyword})


def _form_values(patient: Patient | None) -> dict:
    if patient is None:
        return {'id': '', 'name': '', 'birthDate': '', 'sick': False, 'score': 0}
    return {
        'id': patient.pk or '',
        'name': patient.name,
        'birthDate': patient.birth_date.isoformat() if patient.birth_date else '',
        'sick': patient.sick,
        'score': patient.score,
    }


def _submitted_values(data) -> dict:
    return {
        'id': data.get('id', ''),
        'name': data.get('name', ''),
        'birthDate': data.get('birthDate', ''),
        'sick': 'sick' in data and data.get('sick') not in ('', 'false', 'False', '0', 'off'),
        'score': data.get('score', ''),
    }


def _model_errors(exc: ModelValidationError) -> dict:
    # full_clean always raises per-field errors keyed by model field name
    return {_FORM_NAMES.get(k, k): v for k, v in exc.message_dict.items()}


def _render_form(request, values, *, page=0, keyword='', errors=None, status=200):
    return render(request, FORM_TEMPLATE, {
        'values': values,
        'errors': errors or {},
        'page': page,
        'keyword': keyword,
    }, status=status)


@require_GET
def home(request):
    return redirect('/user/index')


@require_GET
def index(request):
    """List one page of patients whose name contains ``keyword``."""
    q = PatientListQuerySerializer(data=request.GET)
    if not q.is_valid():
        return HttpResponseBadRequest(f'invalid query: {q.errors}')
    page, size, keyword = q.validated_data['page'], q.validated_data['size'], q.validated_data['keyword']
    result = patients.find_by_name_contains(keyword, page, size)
    return render(request, LIST_TEMPLATE, {
        'patients': result.content,
        'pages': range(result.total_pages),
        'page_obj': result,
        'current_page': page,
        'size': size,
        'keyword': keyword,
    })


@require_http_methods(['GET', 'POST'])
@role_required(ROLE_ADMIN)
def delete(request):
    """Delete by id and return to the same list page.

    An id that does not exist is treated as already deleted.
    """
    params = request.POST if request.method == 'POST' else request.GET
    try:
        pid = _int_param(params, 'id')
        page = _int_param(params, 'page', 0)
    except ValueError as e:
        return HttpResponseBadRequest(str(e))
    if pid is None:
        return HttpResponseBadRequest('id is required')
    keyword = params.get('keyword', '')
    if patients.delete_by_id(pid):
        logger.info("patient deleted id=%s by=%s", pid, request.user.get_username())
    else:
        logger.info("delete of absent patient id=%s by=%s", pid, request.user.get_username())
    return redirect(_list_url(page, keyword))


@require_GET
@role_required(ROLE_ADMIN)
def form_patients(request):
    return _render_form(request, _form_values(None))


@require_POST
@role_required(ROLE_ADMIN)
def save(request):
    """Validate and upsert a patient.

    Invalid input re-renders the form with the rejected values and the
    field errors; nothing is written.  Saving an id that no longer exists
    is a 404.
    """
    data = request.POST
    try:
        pid = _int_param(data, 'id')
        page = _int_param(data, 'page', 0)
    except ValueError as e:
        return HttpResponseBadRequest(str(e))
    keyword = data.get('keyword', '')

    instance = None
    if pid is not None:
        instance = patients.find_by_id(pid)
        if instance is None:
            raise Http404('Patient not found')

    s = PatientSerializer(instance, data=data)
    if not s.is_valid():
        return _render_form(request, _submitted_values(data), page=page, keyword=keyword, errors=s.errors)
    try:
        patient = s.save()
    except Patient.DoesNotExist:
        raise Http404('Patient not found') from None
    except ModelValidationError as e:
        return _render_form(request, _submitted_values(data), page=page, keyword=keyword, errors=_model_errors(e))
    logger.info("patient %s id=%s by=%s", 'updated' if instance else 'created', patient.pk, request.user.get_username())
    return redirect(_list_url(page, keyword))


@require_GET
@role_required(ROLE_ADMIN)
def edit_patient(request):
    try:
        pid = _int_param(request.GET, 'id')
        page = _int_param(request.GET, 'page', 0)
    except ValueError as e:
        return HttpResponseBadRequest(str(e))
    if pid is None:
        return HttpResponseBadRequest('id is required')
    patient = patients.find_by_id(pid)
    if patient is None:
        raise Http404('Patient not found')
    return _render_form(request, _form_values(patient), page=page, keyword=request.GET.get('keyword', ''))


def not_authorized(request, exception=None):
    return render(request, 'ward/notAuthorized.html', status=403)
