"""
Persistence gateway for patients.

Every read and write of :class:`~ward.models.Patient` rows goes through the
functions in this module.  Pages are zero-indexed and always ordered by id,
so the same query returns rows in the same order across requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet, Value
from django.db.models.functions import StrIndex

from ward.models import Patient


@dataclass(frozen=True)
class Page:
    """A bounded, ordered slice of a larger result set."""
    content: list[Patient] = field(default_factory=list)
    number: int = 0
    size: int = 1
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        return -(-self.total_elements // self.size)

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages


def _paginate(qs: QuerySet, page: int, size: int) -> Page:
    if page < 0:
        raise ValueError('page index must not be negative')
    if size < 1:
        raise ValueError('page size must be at least 1')
    total = qs.count()
    start = page * size
    content = list(qs.order_by('id')[start:start + size]) if start < total else []
    return Page(content=content, number=page, size=size, total_elements=total)


@transaction.atomic
def save(patient: Patient) -> Patient:
    """Insert or update ``patient``; invalid field values never reach the table.

    A patient loaded from the table is only ever updated.  If its row has
    been deleted in the meantime, ``Patient.DoesNotExist`` is raised instead
    of inserting it again.
    """
    patient.full_clean()
    if patient._state.adding:
        patient.save()
        return patient
    if not Patient.objects.select_for_update().filter(pk=patient.pk).exists():
        raise Patient.DoesNotExist(f'patient {patient.pk} no longer exists')
    patient.save(force_update=True)
    return patient


def find_by_id(patient_id: int) -> Optional[Patient]:
    return Patient.objects.filter(pk=patient_id).first()


def delete_by_id(patient_id: int) -> bool:
    """Delete the patient; returns False when no such row existed."""
    deleted, _ = Patient.objects.filter(pk=patient_id).delete()
    return deleted > 0


def find_page(page: int, size: int) -> Page:
    return _paginate(Patient.objects.all(), page, size)


def find_by_name_contains(keyword: str, page: int, size: int) -> Page:
    """Patients whose name contains ``keyword`` (case-sensitive).

    ``StrIndex`` compiles to INSTR/STRPOS, which compare case-sensitively on
    SQLite as well, unlike ``LIKE``.  An empty keyword matches every row.
    """
    qs = Patient.objects.all()
    if keyword:
        qs = qs.annotate(kw_pos=StrIndex('name', Value(keyword))).filter(kw_pos__gt=0)
    return _paginate(qs, page, size)
