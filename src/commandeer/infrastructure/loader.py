"""Resolve CLI targets to Command subclasses.

A target is either an alias configured under ``[commands.aliases]`` or a
``module:Attribute`` reference. The module part may be a dotted import
path (``myapp.commands:Add``) or a path to a ``.py`` file
(``./scripts/add.py:Add``). The attribute part may be dotted to reach a
nested class.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType

from commandeer.exceptions import CommandError
from commandeer.services.command import Command

logger = logging.getLogger(__name__)


def _import_file(path: Path) -> ModuleType:
    module_name = f"commandeer_target_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Could not create a module spec for {path}"
        raise ValueError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except CommandError:
        sys.modules.pop(module_name, None)
        raise
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Cannot import {path}: {exc}"
        raise ValueError(msg) from exc
    return module


def _import_module(reference: str) -> ModuleType:
    if reference.endswith(".py"):
        path = Path(reference)
        if not path.is_file():
            msg = f"No such file: {reference}"
            raise ValueError(msg)
        return _import_file(path)
    try:
        return importlib.import_module(reference)
    except CommandError:
        raise
    except Exception as exc:
        msg = f"Cannot import module '{reference}': {exc}"
        raise ValueError(msg) from exc


def load_command(target: str, aliases: Mapping[str, str] | None = None) -> type[Command]:
    """Return the Command subclass named by *target*.

    Raises:
        ValueError: The target is malformed, cannot be imported, or does
            not name a Command subclass.
        CommandError: Importing the target module raised a configuration
            error, e.g. a command class with a clashing parameter name.
    """
    resolved = (aliases or {}).get(target, target)
    module_ref, sep, attr_path = resolved.rpartition(":")
    if not sep or not module_ref or not attr_path:
        msg = f"Target {target!r} is neither an alias nor 'module:ClassName'"
        raise ValueError(msg)

    obj: object = _import_module(module_ref)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"'{module_ref}' has no attribute '{attr_path}'"
            raise ValueError(msg) from exc

    if not (isinstance(obj, type) and issubclass(obj, Command)) or obj is Command:
        msg = f"{resolved!r} is not a Command subclass"
        raise ValueError(msg)
    logger.debug("Resolved target %s to %s.%s", target, obj.__module__, obj.__qualname__)
    return obj
