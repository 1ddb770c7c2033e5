# tests/core/jobs/test_sanitize.py
"""
Testes da normalização de nomes de jobs.

Os testes asseguram que:
- o slug resultante é minúsculo, sem '.', '_' ou espaços
- não há '-' nas pontas, nem mesmo após o truncamento
- o tamanho máximo é respeitado
- nomes vazios e a palavra reservada `all` são rejeitados

Invariantes:
    - A normalização é idempotente
"""

import pytest

from atlas_laundry.core.exceptions import ValidationError
from atlas_laundry.core.jobs.job import MAX_NAME_LENGTH, Job, sanitize_job_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("MyJob", "myjob"),
        ("my.job_name", "my-job-name"),
        ("  Daily Likes  ", "daily-likes"),
        ("--edge--", "edge"),
        ("a..b__c", "a-b-c"),
        ("_leading.dot", "leading-dot"),
    ],
)
def test_sanitize_examples(raw, expected):
    assert sanitize_job_name(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Some.Very_Long Name.With_Many.Parts", "x" * 100, "A" * 31 + "._b", "Über.Job_Name"],
)
def test_sanitized_slug_properties(raw):
    """Propriedades do slug para qualquer nome válido."""
    name = sanitize_job_name(raw)

    assert name == name.lower()
    assert "." not in name and "_" not in name
    assert not name.startswith("-") and not name.endswith("-")
    assert 0 < len(name) <= MAX_NAME_LENGTH
    assert sanitize_job_name(name) == name


def test_truncation_never_leaves_trailing_dash():
    raw = "a" * 31 + ".tail"
    assert sanitize_job_name(raw) == "a" * 31


@pytest.mark.parametrize("raw", ["", "   ", "._-", None, "all", "ALL", " All "])
def test_invalid_names_raise(raw):
    with pytest.raises(ValidationError):
        sanitize_job_name(raw)


def test_job_sanitizes_on_creation():
    job = Job(name="My.Job")
    assert job.name == "my-job"
    assert job.key == "my-job"
