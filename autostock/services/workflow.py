"""
Flujos de varios pasos sin transaccion / Multi-step workflows without transactions.

Cada flujo es una lista ordenada de pasos con su politica ante fallos:
- ABORT: el fallo corta el flujo y se informa al llamador.
- CONTINUE: el fallo se registra en el log de operacion y el flujo sigue.
Los pasos ya ejecutados nunca se revierten.
"""

import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from autostock.store.records import StoreError

logger = logging.getLogger(__name__)


class StepPolicy(str, enum.Enum):
    ABORT = "abort_on_failure"
    CONTINUE = "continue_on_failure"


class RecordNotFound(Exception):
    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}/{record_id} not found")
        self.collection = collection
        self.record_id = record_id


class WorkflowError(Exception):
    """Fallo que corta un flujo / Failure that aborts a workflow."""

    def __init__(self, workflow: str, step: str, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.workflow = workflow
        self.step = step
        self.message = message
        self.cause = cause


class PrimaryMutationFailure(WorkflowError):
    """La escritura principal fallo / The main entity write failed."""


class ReadFailure(WorkflowError):
    """La lectura de una coleccion fallo / A collection read failed."""


@dataclass(frozen=True)
class CompensatingStepFailure:
    """Fallo registrado de un paso secundario / Recorded failure of a secondary step."""
    workflow: str
    step: str
    message: str
    error: Exception

    def __str__(self) -> str:
        return self.message


Outputs = dict[str, Any]


@dataclass
class Step:
    name: str
    action: Callable[[Outputs], Awaitable[Any]]
    policy: StepPolicy = StepPolicy.ABORT
    # Mensaje para el usuario si falla / Plain-language message on failure
    message: str = ""
    raises: type[WorkflowError] = PrimaryMutationFailure


@dataclass
class WorkflowResult:
    workflow: str
    completed: list[str] = field(default_factory=list)
    warnings: list[CompensatingStepFailure] = field(default_factory=list)
    outputs: Outputs = field(default_factory=dict)

    @property
    def warning_messages(self) -> list[str]:
        return [str(w) for w in self.warnings]


async def run_workflow(name: str, steps: list[Step]) -> WorkflowResult:
    """Ejecutar los pasos en orden / Run steps strictly in order.

    Solo se capturan errores del almacenamiento; cualquier otra excepcion
    (p. ej. RecordNotFound) sube tal cual.
    """
    result = WorkflowResult(workflow=name)
    for step in steps:
        try:
            result.outputs[step.name] = await step.action(result.outputs)
        except StoreError as exc:
            message = step.message or f"Error en {name}: {step.name}"
            if step.policy is StepPolicy.ABORT:
                logger.error("[%s] step %s failed, aborting: %s", name, step.name, exc)
                raise step.raises(name, step.name, message, exc) from exc
            logger.warning("[%s] step %s failed, continuing: %s", name, step.name, exc)
            result.warnings.append(CompensatingStepFailure(name, step.name, message, exc))
            continue
        result.completed.append(step.name)
    return result
