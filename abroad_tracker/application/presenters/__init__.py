from .text_presenter import TextPresenter

__all__ = ["TextPresenter"]
