# tests/schemas/test_form_schemas.py
import warnings

import pytest

from transparency.schemas.partner import PartnerForm
from transparency.schemas.project import CompletionForm, ProjectForm, SubProjectForm
from transparency.schemas.workspace import ExpenseForm, WorkspaceForm


@pytest.mark.parametrize("form", [
    ProjectForm(),
    SubProjectForm(),
    CompletionForm(),
    PartnerForm(),
    WorkspaceForm(),
    ExpenseForm(),
])
def test_default_forms_dump_without_serializer_warnings(form):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        data = form.model_dump()

    numbers = [value for value in data.values() if isinstance(value, (int, float)) and not isinstance(value, bool)]
    assert all(value == 0 for value in numbers)


def test_form_numbers_keep_raw_text():
    form = ProjectForm(goal="8000", raised="", supporters=None)

    assert form.model_dump()["goal"] == "8000"
    assert form.model_dump()["raised"] == ""
    assert form.model_dump()["supporters"] is None
