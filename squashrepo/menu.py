from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .catalog import Catalog, CatalogLink
from .pipeline import PipelineResult

logger = logging.getLogger(__name__)


class MenuState(enum.Enum):
    CATEGORY = "category"
    REPOSITORY = "repository"
    LINK = "link"
    PIPELINE = "pipeline"
    EXIT = "exit"


@dataclass
class Selection:
    category: Optional[str] = None
    repository: Optional[str] = None
    link: Optional[CatalogLink] = None


class MenuLoop:
    """Category -> repository -> link selection around the pipeline.

    The last entry of every menu goes back one level (or exits from the
    category menu). Invalid input re-prompts the same menu.
    """

    def __init__(
        self,
        catalog: Catalog,
        run_link: Callable[[str], PipelineResult],
        *,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.catalog = catalog
        self.run_link = run_link
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.state = MenuState.CATEGORY
        self.selection = Selection()
        self.results: List[PipelineResult] = []

    def _choose(self, title: str, options: List[str], back_label: str) -> Optional[int]:
        """Return a 0-based index, len(options) for back, None for invalid input."""

        self.output_fn(f"\n{title}")
        for i, opt in enumerate(options, start=1):
            self.output_fn(f"{i}. {opt}")
        self.output_fn(f"{len(options) + 1}. {back_label}")

        raw = self.input_fn("Enter your choice: ")
        try:
            choice = int(raw.strip())
        except ValueError:
            choice = 0
        if 1 <= choice <= len(options) + 1:
            return choice - 1
        self.output_fn("Invalid choice. Please try again.")
        return None

    def _category(self) -> MenuState:
        categories = list(self.catalog.categories)
        idx = self._choose("Select a category:", categories, "Exit")
        if idx is None:
            return MenuState.CATEGORY
        if idx == len(categories):
            return MenuState.EXIT
        self.selection = Selection(category=categories[idx])
        return MenuState.REPOSITORY

    def _repository(self) -> MenuState:
        if self.selection.category is None:
            return MenuState.CATEGORY
        repos = self.catalog.repositories(self.selection.category)
        idx = self._choose("Select a repository:", repos, "Back to Main Menu")
        if idx is None:
            return MenuState.REPOSITORY
        if idx == len(repos):
            return MenuState.CATEGORY
        self.selection.repository = repos[idx]
        return MenuState.LINK

    def _link(self) -> MenuState:
        if self.selection.category is None or self.selection.repository is None:
            return MenuState.CATEGORY
        links = self.catalog.links(self.selection.category, self.selection.repository)
        idx = self._choose("Available links:", [l.title for l in links], "Back to Category Menu")
        if idx is None:
            return MenuState.LINK
        if idx == len(links):
            return MenuState.REPOSITORY
        self.selection.link = links[idx]
        return MenuState.PIPELINE

    def _pipeline(self) -> MenuState:
        if self.selection.link is None:
            return MenuState.CATEGORY
        result = self.run_link(self.selection.link.url)
        self.results.append(result)
        if not result.ok:
            self.output_fn("Repository install finished with errors; see the log for details.")
        return MenuState.CATEGORY

    def step(self) -> MenuState:
        handlers = {
            MenuState.CATEGORY: self._category,
            MenuState.REPOSITORY: self._repository,
            MenuState.LINK: self._link,
            MenuState.PIPELINE: self._pipeline,
        }
        self.state = handlers[self.state]()
        return self.state

    def run(self) -> List[PipelineResult]:
        while self.state is not MenuState.EXIT:
            try:
                self.step()
            except EOFError:
                logger.info("Input closed, exiting")
                self.state = MenuState.EXIT
        return self.results
