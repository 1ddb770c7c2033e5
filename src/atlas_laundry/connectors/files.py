# src/atlas_laundry/connectors/files.py
"""
Conectores de arquivo locais (File, File.Json, File.Csv).

Hierarquia explícita:
    File            → base não selecionável; declara `directory`
    ├── File.Json   → lista JSON de itens em `<directory>/<filename>`
    └── File.Csv    → linhas CSV (cabeçalho + registros) em `<directory>/<filename>`

Como `File.Json` e `File.Csv` são irmãos, um job novo com um deles herda
o `directory` (e o `token`) de jobs existentes que usam o outro.

Decisões (v1):
    - Saída sobrescreve o arquivo inteiro (escrita atômica não é exigida aqui)
    - Arquivo de entrada ausente é falha de fetch (ConnectorError)
    - CSV de saída usa a união das chaves dos itens, na ordem em que aparecem
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence

from atlas_laundry.core.connectors.base import (
    Capability,
    Connector,
    ConnectorInstance,
    EntryDecision,
    Setting,
    SupportsInput,
    SupportsOutput,
)
from atlas_laundry.core.exceptions import ConnectorError, ValidationError


def _require_directory(job: Any, instance: ConnectorInstance, old: Any, new: str) -> str:
    if not new:
        raise ValidationError("Informe um diretório", details={"setting": "directory"})
    return str(Path(new).expanduser())


def _require_suffix(suffix: str):
    def check(job: Any, instance: ConnectorInstance, old: Any, new: str) -> Optional[str]:
        if not new:
            raise ValidationError("Informe um nome de arquivo", details={"setting": "filename"})
        if not new.lower().endswith(suffix):
            return new + suffix
        return None

    return check


def _suggest_filename(suffix: str):
    def suggest(job: Any, instance: ConnectorInstance, prompt: str) -> EntryDecision:
        current = instance.get("filename")
        return EntryDecision(required=True, prompt=prompt, suggest=current or f"{job.name}{suffix}")

    return suggest


DIRECTORY = Setting(
    name="directory",
    prompt="Which directory holds the file?",
    after_entry=_require_directory,
)


class File(Connector, SupportsInput, SupportsOutput):
    """Base dos conectores de arquivo: resolve o caminho e traduz falhas de I/O."""

    type_id: ClassVar[str] = "File"
    parent_type_id: ClassVar[Optional[str]] = None
    name: ClassVar[str] = ""

    input_capability: ClassVar[Capability] = Capability(
        "Read items from a local file.", (DIRECTORY,)
    )
    output_capability: ClassVar[Capability] = Capability(
        "Write items to a local file.", (DIRECTORY,)
    )

    def path(self, settings: Mapping[str, Any]) -> Path:
        directory = settings.get("directory")
        filename = settings.get("filename")
        if not directory or not filename:
            raise ConnectorError(
                "Conector de arquivo sem diretório ou nome de arquivo",
                details={"type_id": self.type_id, "directory": directory, "filename": filename},
                hint="Edite o job e preencha os settings do conector.",
            )
        return Path(str(directory)).expanduser() / str(filename)

    def _base_only(self) -> ConnectorError:
        return ConnectorError(
            f"O tipo base '{self.type_id}' não lê nem escreve arquivos",
            details={"type_id": self.type_id},
            hint="Edite o job e escolha File/JSON ou File/CSV.",
        )

    def read(self, path: Path) -> List[Any]:
        raise self._base_only()

    def write(self, path: Path, items: Sequence[Any]) -> None:
        raise self._base_only()

    def fetch(self, settings: Mapping[str, Any]) -> List[Any]:
        path = self.path(settings)
        try:
            return self.read(path)
        except (OSError, ValueError, csv.Error) as e:
            raise ConnectorError(
                f"Falha ao ler {path}",
                details={"type_id": self.type_id, "path": str(path), "exc_message": str(e)},
            ) from e

    def push(self, items: Sequence[Any], settings: Mapping[str, Any]) -> None:
        path = self.path(settings)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.write(path, items)
        except (OSError, ValueError, TypeError, csv.Error) as e:
            raise ConnectorError(
                f"Falha ao escrever {path}",
                details={"type_id": self.type_id, "path": str(path), "exc_message": str(e)},
            ) from e


class FileJson(File):
    type_id: ClassVar[str] = "File.Json"
    parent_type_id: ClassVar[Optional[str]] = "File"
    name: ClassVar[str] = "File/JSON"

    _FILENAME = Setting(
        name="filename",
        prompt="What is the JSON file called?",
        before_entry=_suggest_filename(".json"),
        after_entry=_require_suffix(".json"),
    )
    input_capability: ClassVar[Capability] = Capability(
        "Read a JSON array of items from a file.", (DIRECTORY, _FILENAME)
    )
    output_capability: ClassVar[Capability] = Capability(
        "Write the items as a JSON array to a file.", (DIRECTORY, _FILENAME)
    )

    def read(self, path: Path) -> List[Any]:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"JSON root must be a list, got {type(data).__name__}")
        return data

    def write(self, path: Path, items: Sequence[Any]) -> None:
        path.write_text(json.dumps(list(items), ensure_ascii=False, indent=2), encoding="utf-8")


class FileCsv(File):
    type_id: ClassVar[str] = "File.Csv"
    parent_type_id: ClassVar[Optional[str]] = "File"
    name: ClassVar[str] = "File/CSV"

    _FILENAME = Setting(
        name="filename",
        prompt="What is the CSV file called?",
        before_entry=_suggest_filename(".csv"),
        after_entry=_require_suffix(".csv"),
    )
    input_capability: ClassVar[Capability] = Capability(
        "Read CSV rows (with a header line) from a file.", (DIRECTORY, _FILENAME)
    )
    output_capability: ClassVar[Capability] = Capability(
        "Write the items as CSV rows to a file.", (DIRECTORY, _FILENAME)
    )

    def read(self, path: Path) -> List[Any]:
        with path.open("r", encoding="utf-8", newline="") as f:
            return [dict(row) for row in csv.DictReader(f)]

    def write(self, path: Path, items: Sequence[Any]) -> None:
        fieldnames: List[str] = []
        rows: List[Dict[str, Any]] = []
        for item in items:
            if not isinstance(item, Mapping):
                raise TypeError(f"CSV items must be mappings, got {type(item).__name__}")
            for key in item:
                if key not in fieldnames:
                    fieldnames.append(key)
            rows.append(dict(item))

        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
