from datetime import date

import pytest
from django.core.exceptions import ValidationError

from ward.models import Patient
from ward.services import patients
from ward.services.patients import Page

pytestmark = pytest.mark.django_db


def names(page):
    return [p.name for p in page.content]


def test_save_then_find_returns_same_fields():
    p = patients.save(Patient(name='Hanane', birth_date=date(1999, 5, 17), sick=True, score=42))
    assert p.pk is not None
    found = patients.find_by_id(p.pk)
    assert (found.name, found.birth_date, found.sick, found.score) == ('Hanane', date(1999, 5, 17), True, 42)


def test_save_updates_existing_row():
    p = patients.save(Patient(name='Mohamed', score=1))
    p.score = 99
    patients.save(p)
    assert Patient.objects.count() == 1
    assert patients.find_by_id(p.pk).score == 99


@pytest.mark.parametrize('fields', [
    {'name': ''},
    {'name': 'Al'},
    {'name': 'x' * 21},
    {'name': 'Valid', 'score': -1},
])
def test_invalid_patient_never_reaches_the_table(fields):
    with pytest.raises(ValidationError):
        patients.save(Patient(**fields))
    assert Patient.objects.count() == 0


def test_find_by_id_absent_returns_none():
    assert patients.find_by_id(12345) is None


def test_search_is_case_sensitive_substring(make_patients):
    make_patients('Alice', 'Bob', 'Charlie', 'Malika')
    assert names(patients.find_by_name_contains('li', 0, 10)) == ['Alice', 'Charlie', 'Malika']
    assert names(patients.find_by_name_contains('Al', 0, 10)) == ['Alice']
    assert names(patients.find_by_name_contains('al', 0, 10)) == ['Malika']
    assert names(patients.find_by_name_contains('zzz', 0, 10)) == []


def test_empty_keyword_matches_everything(make_patients):
    make_patients('Alice', 'Bob', 'Charlie')
    page = patients.find_by_name_contains('', 0, 4)
    assert names(page) == ['Alice', 'Bob', 'Charlie']
    assert page.total_elements == 3
    assert page.total_pages == 1


def test_pagination_counts_and_page_past_the_end(make_patients):
    make_patients('Anna', 'Bella', 'Carla', 'Dora', 'Emma')
    first = patients.find_page(0, 2)
    assert names(first) == ['Anna', 'Bella']
    assert first.total_pages == 3
    assert first.has_next and not first.has_previous
    last = patients.find_page(2, 2)
    assert names(last) == ['Emma']
    assert not last.has_next
    beyond = patients.find_page(7, 2)
    assert beyond.content == []
    assert beyond.total_elements == 5


def test_filtered_pagination_counts_only_matches(make_patients):
    make_patients('Anna', 'Hannah', 'Bob', 'Joanna')
    page = patients.find_by_name_contains('nn', 1, 2)
    assert names(page) == ['Joanna']
    assert page.total_elements == 3
    assert page.total_pages == 2


def test_invalid_page_arguments_are_rejected():
    with pytest.raises(ValueError):
        patients.find_page(-1, 4)
    with pytest.raises(ValueError):
        patients.find_page(0, 0)


def test_delete_present_and_absent(make_patients):
    keep, gone = make_patients('Keeper', 'Goner')
    assert patients.delete_by_id(gone.pk) is True
    assert names(patients.find_page(0, 10)) == ['Keeper']
    assert patients.delete_by_id(gone.pk) is False
    assert names(patients.find_page(0, 10)) == ['Keeper']


def test_empty_page_has_no_pages():
    assert Page(size=4).total_pages == 0
    assert Page(size=4, total_elements=8).total_pages == 2
    assert Page(size=4, total_elements=9).total_pages == 3


def test_update_of_deleted_row_is_not_reinserted(make_patients):
    stale, = make_patients('Stale')
    Patient.objects.filter(pk=stale.pk).delete()
    stale.score = 77
    with pytest.raises(Patient.DoesNotExist):
        patients.save(stale)
    assert Patient.objects.count() == 0


def test_new_patient_with_explicit_id_is_inserted():
    patients.save(Patient(id=500, name='Explicit', score=1))
    assert patients.find_by_id(500).name == 'Explicit'


def test_save_form_for_concurrently_deleted_patient_is_not_found(admin_http, make_patients, monkeypatch):
    stale, = make_patients('Vanished')
    Patient.objects.filter(pk=stale.pk).delete()
    # the row disappears between the lookup and the write
    monkeypatch.setattr(patients, 'find_by_id', lambda pk: stale)
    r = admin_http.post('/admin/save', {'id': stale.pk, 'name': 'Vanished', 'score': '5'})
    assert r.status_code == 404
    assert Patient.objects.count() == 0


def test_save_form_shows_model_validation_errors(admin_http, monkeypatch):
    def reject(patient):
        raise ValidationError({'birth_date': ['Enter a real date.']})
    monkeypatch.setattr(patients, 'save', reject)
    r = admin_http.post('/admin/save', {'name': 'Dated', 'birthDate': '2001-01-01', 'score': '1'})
    assert r.status_code == 200
    assert r.context['errors'] == {'birthDate': ['Enter a real date.']}
    assert r.context['values']['name'] == 'Dated'
