"""Translation manager tying the token algorithms to files and storage."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from .duplicate_detector import DuplicateDetector
from .error_handler import ErrorHandler
from .io import FileReader, FileWriter
from .linter import KeyPathLinter
from .models import FlatRow, TokenGroup
from .parser import TokenTreeParser
from .processors import TreeBuilder, TreeFlattener
from .profiler import PerformanceProfiler
from .storage import ProjectStore
from .types import (
    TranslationManagerInterface,
    DuplicateGroup,
    ExportResult,
    FilterMode,
    KeyIssue,
    Language,
    ProcessingError,
    UploadResult,
)


class TranslationManager(TranslationManagerInterface):
    """
    Main implementation of the translation manager interface.

    Uploads per-language token documents into a project store, annotates
    stored rows with key issues and duplicate values, applies edits, and
    exports the developer and Figma documents.
    """

    def __init__(self, store: ProjectStore,
                 logger: Optional[logging.Logger] = None,
                 developer_filename: str = "translations.json",
                 figma_filename_template: str = "translations-{lang}.json",
                 json_indent: int = 2,
                 autosave: bool = True):
        """
        Initialize the translation manager.

        Args:
            store: Project store holding rows and group extensions
            logger: Optional logger instance
            developer_filename: File name of the developer export
            figma_filename_template: File name of Figma exports; ``{lang}`` is
                replaced by the language code
            json_indent: Indentation of exported JSON files
            autosave: Save the store after every mutating operation when it
                has a file path
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.developer_filename = developer_filename
        self.figma_filename_template = figma_filename_template
        self.autosave = autosave

        self.error_handler = ErrorHandler(self.logger)
        self.parser = TokenTreeParser(self.error_handler, self.logger)
        self.flattener = TreeFlattener(self.parser, self.logger)
        self.builder = TreeBuilder(self.logger)
        self.linter = KeyPathLinter(self.logger)
        self.detector = DuplicateDetector(self.logger)
        self.file_reader = FileReader(self.logger)
        self.file_writer = FileWriter(self.logger, indent=json_indent)
        self.profiler = PerformanceProfiler(self.logger)

    # Upload

    def upload(self, documents: Dict[Any, Optional[str]]) -> UploadResult:
        """
        Flatten per-language JSON documents and merge them into the store.

        Args:
            documents: Mapping of language (enum or code) to JSON text; missing
                or None entries are skipped

        Returns:
            UploadResult with operation details
        """
        supplied = {language: text for language, text in documents.items() if text is not None}
        if not supplied:
            return UploadResult(success=False, token_count=0, group_count=0,
                                errors=["No documents supplied"])

        input_size = sum(len(text.encode('utf-8')) for text in supplied.values())

        with self.profiler.profile_operation("upload", input_size) as profiler:
            trees: Dict[Language, TokenGroup] = {}
            errors: List[str] = []

            for language, text in supplied.items():
                language_check = self.error_handler.validate_language(language)
                if not language_check.is_valid:
                    errors.extend(error.message for error in language_check.errors)
                    continue

                language = Language.parse(language)
                try:
                    trees[language] = self.parser.parse_tree(text)
                except ValueError as e:
                    errors.append(f"{language.value}: {e}")

            if errors:
                return UploadResult(success=False, token_count=0, group_count=0, errors=errors)

            result = self.flattener.flatten(trees)
            rows = [row for row in result.rows if row.key_path.strip()]

            if not rows:
                return UploadResult(success=False, token_count=0, group_count=0,
                                    errors=["No translation tokens found in the uploaded files."])

            try:
                with self.store.transaction():
                    self.store.upsert_rows(rows)
                    self.store.upsert_group_extensions(result.group_extensions)
                    self._persist()
            except ProcessingError as e:
                response = self.error_handler.handle_processing_error(e)
                return UploadResult(success=False, token_count=0, group_count=0,
                                    errors=[str(e), response.suggested_action])

            profiler.record_output(tokens_processed=len(rows))

        self.logger.info(f"Uploaded {len(rows)} tokens from "
                         f"{', '.join(language.value for language in trees)}")
        return UploadResult(
            success=True,
            token_count=len(rows),
            group_count=len(result.group_extensions)
        )

    def upload_files(self, paths: Dict[Any, Optional[Path]]) -> UploadResult:
        """
        Read per-language document files and upload them.

        Args:
            paths: Mapping of language to file path; None entries are skipped

        Returns:
            UploadResult with operation details
        """
        documents: Dict[Any, Optional[str]] = {}
        errors: List[str] = []

        for language, path in paths.items():
            if path is None:
                continue
            try:
                documents[language] = self.file_reader.read_text(path)
            except ProcessingError as e:
                errors.append(str(e))

        if errors:
            return UploadResult(success=False, token_count=0, group_count=0, errors=errors)

        return self.upload(documents)

    # Annotations

    def key_issues(self) -> Dict[str, KeyIssue]:
        """Key issues of all stored rows, keyed by key path."""
        return self.linter.lint_rows(self.store.rows())

    def duplicates(self, include_ignored: bool = False) -> List[DuplicateGroup]:
        """Duplicate value groups, without ignored ones unless requested."""
        groups = self.detector.detect(self.store.rows())
        if include_ignored:
            return groups
        return self.detector.filter_ignored(groups, self.store.ignored_duplicates())

    def duplicates_by_key_path(self) -> Dict[str, List[DuplicateGroup]]:
        """Active duplicate groups indexed by the key paths they contain."""
        return self.detector.index_by_key_path(self.duplicates())

    def ignore_duplicate(self, language: Any, value: str) -> None:
        """Hide a duplicate group from future reports."""
        with self.store.transaction():
            self.store.ignore_duplicate(language, value)
            self._persist()

    def filter_rows(self, mode: Any = FilterMode.ALL, query: str = "") -> List[FlatRow]:
        """
        Rows matching a search query and filter mode.

        Args:
            mode: FilterMode or its value ("all", "issues", "duplicates")
            query: Case-insensitive search text; empty matches everything

        Returns:
            Matching rows ordered by key path
        """
        mode = FilterMode(mode.value if isinstance(mode, FilterMode) else mode)
        rows = self.store.search(query)

        if mode == FilterMode.ISSUES:
            issues = self.key_issues()
            rows = [row for row in rows if row.key_path in issues]
        elif mode == FilterMode.DUPLICATES:
            duplicate_paths = self.duplicates_by_key_path()
            rows = [row for row in rows if row.key_path in duplicate_paths]

        return rows

    # Edits

    def edit_value(self, key_path: str, language: Any, value: Optional[str]) -> FlatRow:
        """Change one language value of a token; an empty value clears it."""
        with self.store.transaction():
            row = self.store.update_value(key_path, language, value)
            self._persist()
        return row

    def rename(self, key_path: str, new_key_path: str) -> FlatRow:
        """Rename a token, remembering its original key."""
        with self.store.transaction():
            row = self.store.rename(key_path, new_key_path)
            self._persist()
        return row

    def delete(self, key_path: str) -> FlatRow:
        """Delete a token. Group extensions are kept."""
        with self.store.transaction():
            row = self.store.delete(key_path)
            self._persist()
        return row

    def accept_fix(self, key_path: str) -> FlatRow:
        """
        Rename a token to the key path suggested by the linter.

        Returns:
            The renamed row, or the unchanged row when it has no issue

        Raises:
            ProcessingError: If the token is missing or the suggested path is taken
        """
        row = self.store.get(key_path)
        issue = self.linter.analyze(key_path)
        if issue is None:
            return row
        return self.rename(key_path, issue.key_path)

    def accept_all_fixes(self) -> Tuple[List[FlatRow], List[str]]:
        """
        Accept every suggested fix that does not collide with an existing key.

        Returns:
            Tuple of (renamed rows, error messages for skipped fixes)

        Raises:
            ProcessingError: If saving fails; no fix is kept in that case
        """
        renamed: List[FlatRow] = []
        errors: List[str] = []

        with self.store.transaction():
            for key_path, issue in self.key_issues().items():
                try:
                    renamed.append(self.store.rename(key_path, issue.key_path))
                except ProcessingError as e:
                    self.error_handler.handle_processing_error(e)
                    errors.append(str(e))

            if renamed:
                self._persist()
        return renamed, errors

    # Export

    def developer_document(self) -> Dict[str, Any]:
        """Build the merged developer document from stored rows."""
        return self.builder.build_developer(self.store.rows())

    def figma_document(self, language: Any) -> Dict[str, Any]:
        """Build the Figma document of one language from stored rows."""
        return self.builder.build_figma(self.store.rows(), self.store.group_extensions(), language)

    def export_developer(self, output_dir: str) -> ExportResult:
        """
        Write the merged developer document.

        Args:
            output_dir: Directory receiving the export file

        Returns:
            ExportResult with operation details
        """
        with self.profiler.profile_operation("export_developer") as profiler:
            document = self.developer_document()
            result = self._write_export(document, output_dir, self.developer_filename,
                                        token_count=len(self.store))
            profiler.record_output(result.size, result.token_count)
        return result

    def export_figma(self, language: Any, output_dir: str) -> ExportResult:
        """
        Write the Figma document of one language.

        Args:
            language: Language enum member or code
            output_dir: Directory receiving the export file

        Returns:
            ExportResult with operation details
        """
        language_check = self.error_handler.validate_language(language)
        if not language_check.is_valid:
            return ExportResult(success=False, output_path=None, token_count=0,
                                errors=[error.message for error in language_check.errors])

        language = Language.parse(language)
        token_count = sum(1 for row in self.store.rows() if row.get_value(language) is not None)

        with self.profiler.profile_operation(f"export_figma_{language.value}") as profiler:
            document = self.figma_document(language)
            filename = self.figma_filename_template.format(lang=language.value)
            result = self._write_export(document, output_dir, filename, token_count)
            profiler.record_output(result.size, result.token_count)
        return result

    def _write_export(self, document: Dict[str, Any], output_dir: str,
                      filename: str, token_count: int) -> ExportResult:
        try:
            file_info = self.file_writer.write_json(document, output_dir, filename)
        except ProcessingError as e:
            response = self.error_handler.handle_processing_error(e)
            return ExportResult(success=False, output_path=None, token_count=0,
                                errors=[str(e), response.suggested_action])

        return ExportResult(
            success=True,
            output_path=file_info["path"],
            token_count=token_count,
            size=file_info["size"]
        )

    @staticmethod
    def render(document: Dict[str, Any], indent: int = 2) -> str:
        """Serialize a document the way export files are written."""
        return json.dumps(document, indent=indent, ensure_ascii=False)

    def _persist(self) -> None:
        if self.autosave and self.store.path is not None:
            self.store.save()
