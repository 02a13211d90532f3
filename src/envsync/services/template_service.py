"""
Template Service for deriving a shareable template from a real env file.

Copies the env file line for line but replaces every value with a
placeholder, so the result can be committed without leaking secrets:

    # Database                      # Database
    DATABASE_URL=postgres://...  -> DATABASE_URL=<YOUR_VALUE_HERE>
    export TOKEN='abc'  # api       export TOKEN='<YOUR_VALUE_HERE>'  # api

Comments, blank lines, ``export`` prefixes and inline comments are kept.
"""

from pathlib import Path
from typing import Optional

from ..config import TemplateConfig
from ..domain.env_file import EnvFile
from ..domain.errors import ConfigurationError
from ..domain.responses import TemplateResult
from ..domain.rows import Declaration
from ..repositories.env_file_repository import EnvFileRepository
from ..utils.logging import get_module_logger


logger = get_module_logger()


class TemplateService:
    """
    Service for template generation.

    Usage:
        service = TemplateService(settings.template, EnvFileRepository(settings.storage))
        result = service.sync()
    """

    def __init__(self, config: TemplateConfig, repository: Optional[EnvFileRepository] = None):
        if not config.placeholder.strip():
            raise ConfigurationError(
                "Template placeholder must not be empty",
                details={"placeholder": config.placeholder},
            )
        self.config = config
        self.repository = repository or EnvFileRepository()

    def build(self, source: EnvFile) -> EnvFile:
        """Return a copy of source with every declared value replaced by the placeholder."""
        # Every declaration is rewritten, not only the last one of a duplicated key
        rows = [
            row.with_value(self.config.placeholder) if isinstance(row, Declaration) else row
            for row in source.stream()
        ]
        return EnvFile(rows, newline=source.newline)

    def sync(self, dry_run: bool = False) -> TemplateResult:
        """
        Read the source file, build its template and write it to the target.

        Args:
            dry_run: Build the template without writing it

        Raises:
            OSError: If the source file cannot be read
            ParseError: If the source file is malformed
            OutputPathError: If the target is a directory
        """
        source = self.repository.load(self.config.source_path)
        template = self.build(source)
        keys = list(source.env())

        if not dry_run:
            self.repository.save(self.config.target_path, template)

        logger.info(
            "Template generated",
            source_path=self.config.source_path,
            target_path=self.config.target_path,
            keys=len(keys),
            written=not dry_run,
        )
        return TemplateResult(
            document=template,
            source_path=str(Path(self.config.source_path)),
            target_path=str(Path(self.config.target_path)),
            keys=keys,
            written=not dry_run,
        )
