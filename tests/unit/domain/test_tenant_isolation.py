from uuid import uuid4

from src.domain.tenant_isolation import (
    TenantReference,
    extract_references,
    find_violation,
)


def test_platform_scope_passes_everything():
    references = [TenantReference("path", "tenant_id", str(uuid4()))]

    assert find_violation(None, True, references) is None


def test_no_identifiers_passes():
    assert find_violation(str(uuid4()), False, []) is None


def test_matching_identifiers_pass_case_insensitively():
    tenant_id = str(uuid4())
    references = [
        TenantReference("path", "college_id", tenant_id.upper()),
        TenantReference("body", "tenantId", tenant_id),
    ]

    assert find_violation(tenant_id, False, references) is None


def test_first_mismatch_is_reported():
    tenant_id = str(uuid4())
    foreign = str(uuid4())
    references = [
        TenantReference("query", "tenant_id", tenant_id),
        TenantReference("body", "publisher_id", foreign),
    ]

    violation = find_violation(tenant_id, False, references)

    assert violation.caller_tenant_id == tenant_id
    assert violation.reference.value == foreign
    assert violation.reference.source == "body"


def test_unbound_non_platform_caller_is_rejected_on_any_identifier():
    references = [TenantReference("path", "tenant_id", str(uuid4()))]

    assert find_violation(None, False, references) is not None


def test_extract_references_reads_all_key_forms():
    data = {
        "tenant_id": "a",
        "collegeId": "b",
        "publisher_id": ["c", "d"],
        "title": "ignored",
        "college_id": "",
    }

    references = extract_references("body", data)

    assert {(r.key, r.value) for r in references} == {
        ("tenant_id", "a"),
        ("collegeId", "b"),
        ("publisher_id", "c"),
        ("publisher_id", "d"),
    }
    assert all(r.source == "body" for r in references)


def test_extract_references_ignores_non_mappings():
    assert extract_references("body", ["tenant_id"]) == ()
    assert extract_references("body", None) == ()
