# src/atlas_laundry/core/connectors/base.py
"""
Contratos canônicos de conectores do Atlas Laundry.

Um conector é uma unidade plugável que busca itens de um sistema externo
(entrada) ou envia itens para ele (saída). Este módulo define:

    - Setting / Capability → schema ordenado de settings por modo
    - Connector            → tipo de conector com identidade hierárquica explícita
    - SupportsInput        → capacidade de entrada (`fetch`)
    - SupportsOutput       → capacidade de saída (`push`)
    - SupportsAuthorization → fase opcional de autorização antes de fetch/push
    - ConnectorInstance    → conector ligado a um job, com valores de settings

Decisões arquiteturais:
    - Capacidades são interfaces explícitas verificadas por `isinstance`,
      nunca pela presença de atributos
    - A hierarquia de tipos é um grafo explícito (`parent_type_id`), não
      um truncamento de strings
    - Todo conector aceita o setting implícito universal `token`

Invariantes:
    - Uma ConnectorInstance só carrega settings declarados no schema do
      seu modo (mais `token`)
    - Uma ConnectorInstance de entrada sempre referencia um SupportsInput
      (idem para saída)

Limites explícitos:
    - Não executa pipelines
    - Não persiste instâncias (responsabilidade do JobStore)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from atlas_laundry.core.exceptions import ValidationError


INPUT = "input"
OUTPUT = "output"
MODES = (INPUT, OUTPUT)

TOKEN_SETTING = "token"


@dataclass(frozen=True)
class EntryDecision:
    """Decisão do hook `before_entry`: perguntar ou não, e com qual sugestão."""

    required: bool
    prompt: str
    suggest: Any = ""


# before_entry(job, instance, prompt) -> EntryDecision
BeforeEntry = Callable[[Any, "ConnectorInstance", str], EntryDecision]
# after_entry(job, instance, old_value, new_value) -> valor reescrito ou None;
# levanta ValidationError para rejeitar a resposta.
AfterEntry = Callable[[Any, "ConnectorInstance", Any, str], Any]


@dataclass(frozen=True)
class Setting:
    """Descritor de um campo configurável de um conector."""

    name: str
    prompt: str
    before_entry: Optional[BeforeEntry] = None
    after_entry: Optional[AfterEntry] = None


@dataclass(frozen=True)
class Capability:
    """Descrição humana e schema ordenado de settings de um modo (entrada/saída)."""

    description: str
    settings: Tuple[Setting, ...] = ()

    def setting_names(self) -> List[str]:
        return [s.name for s in self.settings]


class Connector:
    """
    Tipo de conector registrado no catálogo.

    Subclasses declaram `type_id` (ex.: ``"File.Json"``), `parent_type_id`
    (ex.: ``"File"``) e `name` (nome de exibição, ex.: ``"File/JSON"``).
    Tipos sem `name` são bases: contribuem settings para herança, mas não
    podem ser escolhidos para um job.
    """

    type_id: ClassVar[str] = ""
    parent_type_id: ClassVar[Optional[str]] = None
    name: ClassVar[str] = ""

    @property
    def selectable(self) -> bool:
        return bool(self.name)

    def supports(self, mode: str) -> bool:
        if mode == INPUT:
            return isinstance(self, SupportsInput)
        if mode == OUTPUT:
            return isinstance(self, SupportsOutput)
        raise ValueError(f"Unknown connector mode: {mode!r}")

    def capability(self, mode: str) -> Optional[Capability]:
        if not self.supports(mode):
            return None
        if mode == INPUT:
            return self.input_capability  # type: ignore[attr-defined]
        return self.output_capability  # type: ignore[attr-defined]

    def settings_schema(self, mode: str) -> Tuple[Setting, ...]:
        cap = self.capability(mode)
        return cap.settings if cap is not None else ()

    def allowed_settings(self, mode: str) -> List[str]:
        names = [TOKEN_SETTING]
        for s in self.settings_schema(mode):
            if s.name not in names:
                names.append(s.name)
        return names

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.type_id}>"


class SupportsInput(ABC):
    """Capacidade de entrada: busca uma sequência ordenada de itens."""

    input_capability: ClassVar[Capability]

    @abstractmethod
    def fetch(self, settings: Mapping[str, Any]) -> List[Any]:
        """Busca itens. Falhas devem ser levantadas (idealmente ConnectorError)."""


class SupportsOutput(ABC):
    """Capacidade de saída: envia uma sequência ordenada de itens."""

    output_capability: ClassVar[Capability]

    @abstractmethod
    def push(self, items: Sequence[Any], settings: Mapping[str, Any]) -> None:
        """Envia itens. Falhas devem ser levantadas (idealmente ConnectorError)."""


class SupportsAuthorization(ABC):
    """Fase opcional que precede fetch/push (ex.: renovar um token)."""

    @abstractmethod
    def authorize(self, settings: MutableMapping[str, Any]) -> None:
        """Pode reescrever settings (ex.: `token`); falhas são levantadas."""


@dataclass
class ConnectorInstance:
    """
    Conector ligado a um job em um modo, com os valores de seus settings.

    Valores fora do schema do modo (exceto `token`) são rejeitados com
    ValidationError, tanto na construção quanto em `set`.
    """

    connector: Connector
    mode: str
    settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValidationError(
                f"Modo de conector inválido: {self.mode!r}",
                details={"mode": self.mode},
            )
        if not self.connector.supports(self.mode):
            raise ValidationError(
                f"Conector '{self.connector.type_id}' não suporta {self.mode}",
                details={"type_id": self.connector.type_id, "mode": self.mode},
                hint="Escolha um conector com a capacidade exigida.",
            )
        values = dict(self.settings)
        self.settings = {}
        self.update(values)

    @property
    def type_id(self) -> str:
        return self.connector.type_id

    @property
    def name(self) -> str:
        return self.connector.name or self.connector.type_id

    def schema(self) -> Tuple[Setting, ...]:
        return self.connector.settings_schema(self.mode)

    def allowed_settings(self) -> List[str]:
        return self.connector.allowed_settings(self.mode)

    def get(self, name: str, default: Any = None) -> Any:
        return self.settings.get(name, default)

    def set(self, name: str, value: Any) -> None:
        if name not in self.allowed_settings():
            raise ValidationError(
                f"Setting '{name}' não é declarado por '{self.type_id}' ({self.mode})",
                details={"type_id": self.type_id, "mode": self.mode, "setting": name},
            )
        self.settings[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_id, "settings": dict(self.settings)}
