# tests/core/settings/test_inheritance.py
"""
Testes da herança de settings entre jobs com conectores aparentados.

Os testes asseguram que:
- irmãos na hierarquia compartilham `token` e settings dos ancestrais
- settings específicos de um tipo nunca vazam para outro
- o último job relacionado vence
- a hierarquia segue `parent_type_id`, nunca o formato do type_id
- o job em edição não herda de si mesmo
"""

from typing import ClassVar

from atlas_laundry.core.connectors.base import Capability, ConnectorInstance
from atlas_laundry.core.settings.inheritance import (
    apply_inherited_settings,
    inherit_settings,
    inheritable_setting_names,
    related_jobs,
)

from tests._helpers import RecordingConnector


class LookAlike(RecordingConnector):
    """type_id com cara de filho de Service.Sub, mas sem pai declarado."""

    type_id = "Service.Sub.C"
    name = "Service/C"
    input_capability: ClassVar[Capability] = Capability("Look-alike.", ())
    output_capability: ClassVar[Capability] = Capability("Look-alike.", ())


def test_sibling_inherits_token(ctx, catalog, add_job):
    add_job(
        "j1",
        input_type="Service.Sub.A",
        input_settings={"token": "T", "account": "acc", "region": "eu", "playlist": "likes"},
    )

    inherited = inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.B"), "input")

    assert inherited == {"token": "T", "account": "acc", "region": "eu"}


def test_inherited_values_prefill_new_instance(ctx, catalog, add_job):
    add_job("j1", input_type="Service.Sub.A", input_settings={"token": "T"})
    instance = ConnectorInstance(catalog.get("Service.Sub.B"), "input")

    inherited = inherit_settings(catalog, ctx.registry.list(), instance.connector, "input")
    apply_inherited_settings(instance, inherited)

    assert instance.get("token") == "T"
    assert instance.get("folder") is None


def test_setting_names_come_from_ancestors(catalog):
    names = inheritable_setting_names(catalog, catalog.get("Service.Sub.A"), "input")
    assert names == ["token", "account", "region"]


def test_last_related_job_wins(ctx, catalog, add_job):
    add_job("j1", input_type="Service.Sub.A", input_settings={"token": "T1"})
    add_job("j2", input_type="Service.Sub.B", input_settings={"token": "T2"})

    inherited = inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.A"), "input")

    assert inherited["token"] == "T2"


def test_missing_values_are_not_copied(ctx, catalog, add_job):
    add_job("j1", input_type="Service.Sub.A", input_settings={"token": "T1", "region": "eu"})
    add_job("j2", input_type="Service.Sub.B", input_settings={"account": "acc"})

    inherited = inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.A"), "input")

    assert inherited == {"token": "T1", "region": "eu", "account": "acc"}


def test_mode_is_respected(ctx, catalog, add_job):
    add_job("j1", output_type="Service.Sub.A", output_settings={"token": "OUT"})

    assert inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.B"), "input") == {}
    assert inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.B"), "output") == {
        "token": "OUT"
    }


def test_type_without_ancestors_inherits_nothing(ctx, catalog, add_job):
    add_job("j1", input_type="Memory", input_settings={"token": "T"})

    assert related_jobs(catalog, ctx.registry.list(), catalog.get("Memory"), "input") == []
    assert inherit_settings(catalog, ctx.registry.list(), catalog.get("Memory"), "input") == {}


def test_hierarchy_follows_declared_parents(ctx, catalog, add_job):
    catalog.register(LookAlike())
    add_job("j1", input_type="Service.Sub.A", input_settings={"token": "T"})
    add_job("j2", input_type="Service.Sub.C", input_settings={"token": "C"})

    assert inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.C"), "input") == {}
    inherited = inherit_settings(catalog, ctx.registry.list(), catalog.get("Service.Sub.B"), "input")
    assert inherited == {"token": "T"}


def test_job_being_edited_is_excluded(ctx, catalog, add_job):
    add_job("j1", input_type="Service.Sub.A", input_settings={"token": "OTHER"})
    add_job("j2", input_type="Service.Sub.A", input_settings={"token": "MINE"})

    inherited = inherit_settings(
        catalog, ctx.registry.list(), catalog.get("Service.Sub.A"), "input", exclude="J2"
    )

    assert inherited == {"token": "OTHER"}
