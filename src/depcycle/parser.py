"""Edge file parser."""

import csv
import io
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from .models import EdgeRow
from .utils.exceptions import EdgeFileError

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("source", "target")


class EdgeFileParser:
    """
    Parse CSV edge lists into validated EdgeRow models.

    Features:
    - Column order doesn't matter (header row names the columns)
    - Extra columns are preserved on the row models
    - Lines starting with '#' are comments
    - Blank rows are skipped
    - Whitespace is stripped from all values
    """

    def __init__(self, csv_path: Path) -> None:
        """
        Initialize parser with CSV file path.

        Args:
            csv_path: Path to the edge file
        """
        self.csv_path = csv_path
        self.rows_parsed = 0
        self.errors: list[EdgeFileError] = []

    def parse(self, strict: bool = True) -> list[EdgeRow]:
        """
        Parse the edge file.

        Args:
            strict: If True, raise on first error. If False, collect all errors.

        Returns:
            List of validated EdgeRow objects in file order

        Raises:
            EdgeFileError: If the header is missing or a row is invalid (strict mode)
            FileNotFoundError: If the file doesn't exist
        """
        if not self.csv_path.exists():
            raise FileNotFoundError(f"Edge file not found: {self.csv_path}")

        logger.info("Starting edge file parse", csv_path=str(self.csv_path))

        self.errors = []
        self.rows_parsed = 0

        try:
            with open(self.csv_path, encoding="utf-8-sig") as f:
                lines = f.readlines()

            # Blank out comments instead of dropping them so line numbers stay true
            content = "".join("\n" if line.lstrip().startswith("#") else line for line in lines)
            records = list(enumerate(csv.reader(io.StringIO(content)), start=1))
        except UnicodeDecodeError as e:
            raise EdgeFileError(
                f"{self.csv_path} is not valid UTF-8 (byte offset {e.start})",
                original_error=e,
            ) from e
        except OSError as e:
            raise EdgeFileError(f"Cannot read {self.csv_path}: {e}", original_error=e) from e
        except csv.Error as e:
            raise EdgeFileError(f"Malformed CSV in {self.csv_path}: {e}", original_error=e) from e

        headers: list[str] | None = None
        rows: list[EdgeRow] = []

        for line_num, row_list in records:
            if not row_list or all(not cell.strip() for cell in row_list):
                continue

            if headers is None:
                headers = [h.strip().lower() for h in row_list]
                missing = [col for col in REQUIRED_COLUMNS if col not in headers]
                if missing:
                    raise EdgeFileError(
                        f"Header is missing required columns: {', '.join(missing)}",
                        line_number=line_num,
                    )
                logger.debug("Header detected", headers=headers, line=line_num)
                continue

            try:
                if len(row_list) != len(headers):
                    logger.warning(
                        "Column count mismatch",
                        line=line_num,
                        expected=len(headers),
                        actual=len(row_list),
                    )

                padded_row = row_list[: len(headers)]
                while len(padded_row) < len(headers):
                    padded_row.append("")
                row_dict: dict[str, Any] = dict(zip(headers, padded_row, strict=True))
                row_dict["line_number"] = line_num

                rows.append(EdgeRow.model_validate(row_dict))
                self.rows_parsed += 1

            except ValidationError as e:
                error = EdgeFileError(
                    self._format_validation_error(e),
                    line_number=line_num,
                    original_error=e,
                )
                if strict:
                    logger.error("Edge row validation failed", line=line_num)
                    raise error from e
                self.errors.append(error)

        if headers is None:
            logger.warning("Edge file is empty or contains only comments", csv_path=str(self.csv_path))

        logger.info(
            "Edge file parse complete",
            rows_parsed=self.rows_parsed,
            errors=len(self.errors),
            csv_path=str(self.csv_path),
        )

        return rows

    def _format_validation_error(self, error: ValidationError) -> str:
        """
        Format Pydantic validation error into human-readable message.

        Args:
            error: Pydantic ValidationError

        Returns:
            Formatted error message
        """
        errors = error.errors()
        if not errors:
            return str(error)

        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        msg = first_error["msg"]

        if len(errors) > 1:
            return f"{field}: {msg} (and {len(errors) - 1} more errors)"
        return f"{field}: {msg}"

    def get_error_summary(self) -> str:
        """
        Get a summary of all collected errors.

        Returns:
            One error per line, or 'No errors'
        """
        if not self.errors:
            return "No errors"
        return "\n".join(str(error) for error in self.errors)
