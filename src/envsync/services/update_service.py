"""
Update Service for synchronizing an env file with its template.

The template (input, typically ``.env.example``) defines which keys must
exist; the output (typically ``.env``) holds the real values. The service
walks the template row by row, asks for a value for each declaration and
writes the output once every row has been handled.

Flow:
1. Load the template; refuse an output path that is a directory
2. Load the output if present and seed it with template keys it lacks
   (existing values are never overwritten); otherwise copy the template
3. Walk the template: comments collect into the next prompt, blank lines
   are skipped, each declaration is prompted once in file order
4. Render the template with the collected values, appending keys that only
   the output declares, and write it atomically

Prompting:
    The prompt is injected. UpdateService.run() takes a blocking callable,
    UpdateService.run_async() an awaitable one; both drive the same
    UpdateSession, so filtering and answer handling exist exactly once.

Answers:
    - non-empty answer: becomes the value
    - empty answer: the default (current value) is kept
    - None (end of input): the value is cleared
"""

from pathlib import Path
from typing import Iterator, List, Optional

from ..config import UpdateConfig
from ..domain.env_file import EnvFile
from ..domain.requests import PromptRequest
from ..domain.responses import UpdateResult
from ..domain.rows import CommentOnly, Declaration
from ..domain.types import AsyncPromptFn, EnvMapping, PromptFn
from ..repositories.env_file_repository import EnvFileRepository
from ..utils.logging import get_module_logger


logger = get_module_logger()


class UpdateSession:
    """
    State of one update run, independent of how answers are obtained.

    Usage:
        session = service.prepare()
        for request in session.requests():
            session.answer(request, ask(request.text))
        document = session.result()
    """

    def __init__(
        self,
        template: EnvFile,
        existing: EnvMapping,
        working: EnvMapping,
        only_empty: bool = False,
        only_filled: bool = False,
    ):
        """
        Initialize an update session.

        Args:
            template: Parsed input document; its rows drive the prompts
            existing: Values the output file already had before seeding
            working: Values to render; updated by answer()
            only_empty: Skip keys that already have a non-empty value
            only_filled: Skip keys that have no value yet
        """
        self.template = template
        self.existing = dict(existing)
        self.working = dict(working)
        self.only_empty = only_empty
        self.only_filled = only_filled

        self.prompted: List[str] = []
        self.skipped: List[str] = []
        self.cleared: List[str] = []

    def _is_filled(self, key: str) -> bool:
        return bool(self.existing.get(key))

    def requests(self) -> Iterator[PromptRequest]:
        """
        Yield one prompt per template declaration that passes the filters.

        The generator is lazy: defaults are read when a request is produced,
        so answers given so far are taken into account.
        """
        buffer = ""
        for row in self.template.stream():
            if isinstance(row, CommentOnly):
                buffer += f"# {row.text}\n"
                continue
            if not isinstance(row, Declaration):
                continue

            key = row.name
            filled = self._is_filled(key)
            if (self.only_empty and filled) or (self.only_filled and not filled):
                self.skipped.append(key)
                buffer = ""
                continue

            default = self.working.get(key, "")
            text = f"{buffer}{key}"
            if default:
                text += f" ({default})"
            buffer = ""

            self.prompted.append(key)
            yield PromptRequest(key=key, text=text, default=default)

    def answer(self, request: PromptRequest, reply: Optional[str]) -> None:
        """Record the answer to a request."""
        if reply is None:
            self.cleared.append(request.key)
            self.working[request.key] = ""
            logger.info("Value cleared at end of input", key=request.key)
        elif reply:
            self.working[request.key] = reply
        else:
            self.working[request.key] = request.default

    def result(self) -> EnvFile:
        """Render the template with the collected values."""
        return self.template.apply(self.working, include_missing=True)


class UpdateService:
    """
    Service for the interactive template-to-output update.

    Usage:
        service = UpdateService(settings.update, EnvFileRepository(settings.storage))
        result = service.run(prompt)
    """

    def __init__(self, config: UpdateConfig, repository: Optional[EnvFileRepository] = None):
        """
        Initialize update service.

        Args:
            config: Paths, filters and dry-run flag
            repository: File access; a default repository is created when omitted
        """
        self.config = config
        self.repository = repository or EnvFileRepository()
        self._created = False

        if config.only_empty and config.only_filled:
            logger.warning("only_empty and only_filled are both set, every key will be skipped")

    def prepare(self) -> UpdateSession:
        """
        Load both files and build the session.

        Raises:
            OSError: If the template cannot be read
            OutputPathError: If the output path is a directory
            ParseError: If either file is malformed
        """
        template = self.repository.load(self.config.input_path)
        output = self.repository.load_optional(self.config.output_path)

        if output is None:
            self._created = True
            existing: EnvMapping = {}
            output = template.copy()
        else:
            self._created = False
            existing = output.env()
            output.apply_assign(template.env(), overwrite=False)

        logger.info(
            "Update prepared",
            input_path=self.config.input_path,
            output_path=self.config.output_path,
            template_keys=len(template.env()),
            existing_keys=len(existing),
            created=self._created,
        )
        return UpdateSession(
            template,
            existing=existing,
            working=output.working_env(),
            only_empty=self.config.only_empty,
            only_filled=self.config.only_filled,
        )

    def run(self, prompt: PromptFn) -> UpdateResult:
        """Run the update with a blocking prompt."""
        session = self.prepare()
        for request in session.requests():
            session.answer(request, prompt(request.text))
        return self._finish(session)

    async def run_async(self, prompt: AsyncPromptFn) -> UpdateResult:
        """Run the update with an awaitable prompt."""
        session = self.prepare()
        for request in session.requests():
            session.answer(request, await prompt(request.text))
        return self._finish(session)

    def _finish(self, session: UpdateSession) -> UpdateResult:
        """Render the result and persist it unless running dry."""
        document = session.result()
        output_path = str(Path(self.config.output_path))

        if not self.config.dry_run:
            self.repository.save(output_path, document)

        logger.info(
            "Update finished",
            output_path=output_path,
            prompted=len(session.prompted),
            skipped=len(session.skipped),
            cleared=len(session.cleared),
            written=not self.config.dry_run,
        )
        return UpdateResult(
            document=document,
            output_path=output_path,
            prompted=session.prompted,
            skipped=session.skipped,
            cleared=session.cleared,
            created=self._created,
            written=not self.config.dry_run,
        )
