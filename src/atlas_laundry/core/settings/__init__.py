# src/atlas_laundry/core/settings/__init__.py
"""
Settings de conectores: herança entre jobs aparentados e entrada de campos.
"""

from .entry import INVALID_ANSWER, clean_answer, configure_instance, enter_setting
from .inheritance import (
    apply_inherited_settings,
    inherit_settings,
    inheritable_setting_names,
    related_jobs,
)

__all__ = [
    "INVALID_ANSWER",
    "apply_inherited_settings",
    "clean_answer",
    "configure_instance",
    "enter_setting",
    "inherit_settings",
    "inheritable_setting_names",
    "related_jobs",
]
