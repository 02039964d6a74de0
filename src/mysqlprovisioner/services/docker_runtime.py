"""Docker runtime services for mysqlprovisioner."""

import shutil
from typing import Callable, List, Sequence

from mysqlprovisioner.constants import CONTAINER_NAME_TOKENS, DOCKER_BINARY
from mysqlprovisioner.errors import ContainerNotFoundError, ProvisionerError
from mysqlprovisioner.errors_catalog import actionable_error
from mysqlprovisioner.models import ContainerRef


def select_container(candidates: Sequence[ContainerRef], answer: str) -> ContainerRef:
    """Resolves a pick-list answer to a container.

    An empty answer selects the first candidate and a number within range
    selects by 1-based index. Anything else, including an out-of-range
    number, is taken verbatim as a container name.
    """
    clean_answer = (answer or "").strip()
    if not clean_answer:
        if not candidates:
            raise ContainerNotFoundError(
                actionable_error("container_not_found", key="<ENV>_DOCKER_CONTAINER")
            )
        return candidates[0]

    if clean_answer.isdigit():
        index = int(clean_answer)
        if 1 <= index <= len(candidates):
            return candidates[index - 1]

    return ContainerRef(clean_answer)


class ContainerLocator:
    """Finds running MySQL/MariaDB containers through the docker CLI."""

    NAME_FORMAT = "{{.Names}}"

    def __init__(self, logger, command_runner, which: Callable = shutil.which):
        self.logger = logger
        self.command_runner = command_runner
        self.which = which

    def is_available(self) -> bool:
        return self.which(DOCKER_BINARY) is not None

    def _running_names(self) -> List[str]:
        result = self.command_runner.run(
            [DOCKER_BINARY, "ps", "--format", self.NAME_FORMAT],
            check=False,
            capture_output=True,
        )
        if result.returncode != 0:
            raise ProvisionerError(
                f"Could not list Docker containers: {(result.stderr or '').strip()}"
            )
        return [line.strip() for line in (result.stdout or "").splitlines() if line.strip()]

    @staticmethod
    def is_mysql_name(name: str) -> bool:
        lowered = name.lower()
        return any(token in lowered for token in CONTAINER_NAME_TOKENS)

    def list_candidates(self) -> List[ContainerRef]:
        if not self.is_available():
            self.logger.debug("Docker is not installed; no containers to inspect.")
            return []

        try:
            names = self._running_names()
        except ProvisionerError as exc:
            self.logger.warning("%s", exc)
            return []

        candidates = [ContainerRef(name) for name in names if self.is_mysql_name(name)]
        self.logger.debug(
            "Found %s MySQL container(s): %s",
            len(candidates),
            ", ".join(ref.name for ref in candidates) or "<none>",
        )
        return candidates

    def choose(
        self,
        candidates: Sequence[ContainerRef],
        ask: Callable[[Sequence[ContainerRef]], str],
    ) -> ContainerRef:
        if not candidates:
            raise ContainerNotFoundError(
                actionable_error("container_not_found", key="<ENV>_DOCKER_CONTAINER")
            )
        if len(candidates) == 1:
            return candidates[0]
        return select_container(candidates, ask(candidates))

    def validate_running(self, ref: ContainerRef) -> bool:
        """Checks that ``ref`` is running right now; the result is never cached."""
        try:
            names = self._running_names()
        except ProvisionerError as exc:
            self.logger.warning("%s", exc)
            return False
        return ref.name in names
