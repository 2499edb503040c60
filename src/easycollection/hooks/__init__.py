"""Hook registration and composition exports."""

from easycollection.hooks.pipeline import (
    HookConfig,
    HookPipeline,
    PreRemove,
    ReadFilter,
    Validator,
)

__all__ = ["HookConfig", "HookPipeline", "PreRemove", "ReadFilter", "Validator"]
