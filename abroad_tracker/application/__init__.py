from .bootstrap import bootstrap_app
from .container import AppConfig, AppContainer, create_container
from .pages import Page
from .workflow import TrackerWorkflow

__all__ = [
    "AppConfig",
    "AppContainer",
    "Page",
    "TrackerWorkflow",
    "bootstrap_app",
    "create_container",
]
