from pydantic import BaseModel, computed_field

from corpus.enums import Severity


class Finding(BaseModel):
    rule: str
    severity: Severity
    path: str
    line: int | None = None
    message: str

    def sort_key(self) -> tuple[str, int, str]:
        return (self.path, self.line or 0, self.rule)


class LintReport(BaseModel):
    findings: list[Finding]
    files_checked: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    def failed(self, fail_on_warning: bool = False) -> bool:
        if self.error_count:
            return True
        return fail_on_warning and self.warning_count > 0
