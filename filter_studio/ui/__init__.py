"""User interface layer.

Applications create a :class:`~filter_studio.ui.main_window.MainWindow`,
which owns the pipeline together with its Qt display and error collaborators.
"""

from .display import QtDisplaySink
from .error_dialog import ErrorDialog
from .error_reporter import QtErrorReporter
from .main_window import MainWindow
from .pipeline_controller import PipelineController

__all__ = [
    "ErrorDialog",
    "MainWindow",
    "PipelineController",
    "QtDisplaySink",
    "QtErrorReporter",
]
