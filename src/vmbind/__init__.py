"""vmbind: template and directive data binding for Python node trees."""

from importlib.metadata import version as _version

__version__ = _version("vmbind")

from vmbind.channel import Channel
from vmbind.config import BindConfig
from vmbind.observable import Observable, ObservableModel
from vmbind.template import Template
from vmbind.binding import Binding, TextBinding, DirectiveBinding, default_formatter
from vmbind.directives import DirectiveRegistry, bind_v_model, default_registry, handler_id
from vmbind.scanner import TreeScanner, scan
from vmbind.viewmodel import ViewModel
from vmbind.exceptions import (
    VMBindError,
    MissingKeyError,
    AmbiguousKeyError,
    MalformedTemplateError,
    ReentrantMutationError,
    ModelCycleError,
    UnknownDirectiveError,
)
# textual bridge NOT auto-imported — opt-in only

__all__ = [
    "Channel",
    "BindConfig",
    "Observable",
    "ObservableModel",
    "Template",
    "Binding",
    "TextBinding",
    "DirectiveBinding",
    "default_formatter",
    "DirectiveRegistry",
    "bind_v_model",
    "default_registry",
    "handler_id",
    "TreeScanner",
    "scan",
    "ViewModel",
    "VMBindError",
    "MissingKeyError",
    "AmbiguousKeyError",
    "MalformedTemplateError",
    "ReentrantMutationError",
    "ModelCycleError",
    "UnknownDirectiveError",
]
