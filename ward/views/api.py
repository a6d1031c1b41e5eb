"""
JSON read API over the patient list.

Mirrors the ``/user/index`` page for scripted clients: same query
parameters, same substring search, session authentication.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.serializers.patient import PatientListQuerySerializer, PatientSerializer
from ward.services import patients


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_patients(request):
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    result = patients.find_by_name_contains(vd['keyword'], vd['page'], vd['size'])
    return Response({
        'ok': True,
        'data': PatientSerializer(result.content, many=True).data,
        'pagination': {
            'page': result.number,
            'pageSize': result.size,
            'total': result.total_elements,
            'totalPages': result.total_pages,
        },
    })
