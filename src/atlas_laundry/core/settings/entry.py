# src/atlas_laundry/core/settings/entry.py
"""
Máquina de estados de entrada de campos de um conector.

Para cada setting do schema, na ordem declarada:
    1. `before_entry` decide se o campo deve ser perguntado e pode sugerir
       um valor; se não for exigido, o campo é pulado sem alteração.
    2. O campo é perguntado com a sugestão (ou o valor atual) como default.
    3. A resposta é normalizada (trim, remoção de sequências de controle).
    4. `after_entry` pode rejeitar (ValidationError → nova pergunta do
       mesmo campo) ou reescrever o valor.
    5. Aceita, a resposta é gravada e a máquina segue para o próximo campo.

Decisões arquiteturais:
    - I/O é injetado (`ask`, `notify`); o core nunca toca no terminal
    - Não há orçamento global de tentativas: um campo mal preenchido é
      perguntado até receber uma resposta aceitável
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from atlas_laundry.core.connectors.base import ConnectorInstance, EntryDecision, Setting
from atlas_laundry.core.exceptions import ValidationError

Ask = Callable[[str, str], str]
Notify = Callable[[str], None]

INVALID_ANSWER = "That's not a valid answer. Try again?"

_ANSI = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b[@-Z\\-_]")
_CONTROL = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def clean_answer(raw: Any) -> str:
    """Remove sequências ANSI e caracteres de controle e apara espaços."""
    text = "" if raw is None else str(raw)
    text = _ANSI.sub("", text)
    text = _CONTROL.sub("", text)
    return text.strip()


def _default_decision(setting: Setting) -> EntryDecision:
    return EntryDecision(required=True, prompt=setting.prompt, suggest="")


def enter_setting(
    job: Any,
    instance: ConnectorInstance,
    setting: Setting,
    ask: Ask,
    notify: Optional[Notify] = None,
) -> Optional[str]:
    """Executa o laço de um único campo. Retorna o valor gravado ou None se pulado."""
    while True:
        if setting.before_entry is not None:
            decision = setting.before_entry(job, instance, setting.prompt)
        else:
            decision = _default_decision(setting)

        if not decision.required:
            return None

        current = instance.get(setting.name)
        if decision.suggest:
            default = str(decision.suggest)
        elif current:
            default = str(current)
        else:
            default = ""

        answer = clean_answer(ask(decision.prompt or setting.prompt, default))

        if setting.after_entry is not None:
            try:
                rewritten = setting.after_entry(job, instance, current, answer)
            except ValidationError as exc:
                if notify is not None:
                    notify(exc.message or INVALID_ANSWER)
                continue
            if rewritten is not None:
                answer = rewritten

        instance.set(setting.name, answer)
        return answer


def configure_instance(
    job: Any,
    instance: ConnectorInstance,
    ask: Ask,
    notify: Optional[Notify] = None,
) -> ConnectorInstance:
    for setting in instance.schema():
        enter_setting(job, instance, setting, ask, notify)
    return instance
