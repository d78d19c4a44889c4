"""Esquema de resultado de flujo / Workflow outcome schema."""

from pydantic import BaseModel

from autostock.services.workflow import WorkflowResult


class WorkflowOutcome(BaseModel):
    """Resultado con avisos no bloqueantes / Result with non-blocking warnings."""
    ok: bool = True
    completed: list[str] = []
    warnings: list[str] = []

    @classmethod
    def from_result(cls, result: WorkflowResult) -> "WorkflowOutcome":
        return cls(completed=result.completed, warnings=result.warning_messages)
