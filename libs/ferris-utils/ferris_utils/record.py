import json
import re
from dataclasses import dataclass
from typing import Any

from ferris_utils.cmd import ExecStatus

RECORD_PATTERN = re.compile(r"\<record\>(.+?)\<\/record\>")

# matches the console format installed by `FerrisClient.set_logger_config`
ERROR_LOG_PATTERN = re.compile(
    r"^\[(?P<prefix>.+?) \d{4}-\d{2}-\d{2} [0-9:,]+ ~ (?:ERROR|CRITICAL)\]: (?P<message>.*)$",
    flags=re.MULTILINE,
)


@dataclass(frozen=True)
class RecordError:
    context: str
    prefix: str
    message: str


@dataclass(frozen=True)
class RecordEntry:
    context: str
    entries: dict[str, Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecordEntry":
        return RecordEntry(
            context=data.get("context", "<no context>"),
            entries=data,
        )


@dataclass
class Record:
    """
    Very simple interface to the record lines of a program execution.
    An example record could look like this:
    ```
    <record>{"context": "add", "args": [2, 3], "result": 5}</record>
    ```
    Error log lines on stderr are attributed to the last context.
    """

    # ordered log entries
    entries: list[RecordEntry]
    errors: list[RecordError]
    exec_status: ExecStatus

    def get_entry_by_context(self, context: str) -> RecordEntry | None:
        for entry in reversed(self.entries):
            if entry.context == context:
                return entry
        return None  # context not available or no entries present

    def get_last_entry(self) -> RecordEntry | None:
        if len(self.entries) > 0:
            return self.entries[-1]
        return None  # no entries present

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def is_failure(self) -> bool:
        return self.exec_status.is_failure()


def format_record(context: str, **fields: Any) -> str:
    """Render one record line. `ensure_ascii` is off so text survives verbatim."""
    return f"<record>{json.dumps({'context': context, **fields}, ensure_ascii=False)}</record>"


def record_from_exec_status(exec_status: ExecStatus) -> Record:
    entries = []
    for entry_match in re.finditer(RECORD_PATTERN, exec_status.stdout):
        entries.append(RecordEntry.from_dict(json.loads(entry_match.group(1))))

    context = entries[-1].context if len(entries) > 0 else "<no context>"
    errors = [
        RecordError(context, m.group("prefix"), m.group("message"))
        for m in re.finditer(ERROR_LOG_PATTERN, exec_status.stderr)
    ]

    return Record(entries, errors, exec_status)
