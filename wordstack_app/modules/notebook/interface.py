"""Public API of the notebook module."""
from typing import List

from .services.notebook_service import NotebookService


def get_notebook_spellings(user_id: int, notebook_id: int) -> List[str]:
    return NotebookService.get_notebook_spellings(user_id, notebook_id)


def get_owned_notebook(user_id: int, notebook_id: int):
    return NotebookService.get_owned_notebook(user_id, notebook_id)
