"""FastAPI アプリケーション - REST API エンドポイント"""
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

import sys

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from application.exceptions import FlowNotFoundError, IdempotencyError, ProcessNotFoundError
from application.flows.progress import FlowProgress
from application.process.business_process import BusinessProcess
from application.process.catalog import ProcessCatalog
from application.process.diagram import flow_to_mermaid
from application.services.idempotency_service import IdempotencyService
from domain.case import Case
from domain.determination import Determination
from domain.events import Event
from domain.exceptions import ConfigurationError, ValidationError
from domain.flows.application_form_flow import ApplicationFormFlow
from domain.ids import IdempotencyKey
from infrastructure.cases.in_memory_case_repository import InMemoryCaseRepository
from infrastructure.config.settings import Settings
from infrastructure.definitions.directory_loader import load_directory
from infrastructure.definitions.loader_registry import DefinitionLoaderRegistry
from infrastructure.events.in_memory_event_bus import InMemoryEventBus
from infrastructure.idempotency.in_memory_idempotency_store import InMemoryIdempotencyStore
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.routing.path_route_resolver import PathRouteResolver
from infrastructure.tasks.in_memory_staff_work_queue import InMemoryStaffWorkQueue, StaffWorkItem


class PublishEventRequest(BaseModel):
    """イベント発行リクエスト"""
    payload: Dict[str, Any] = Field(default_factory=dict, description="Event payload; case_id or application_form_id")
    idempotency_key: Optional[str] = Field(
        default=None,
        description="Publish at most once per event name when provided.",
    )


class PublishEventResponse(BaseModel):
    event: str = Field(description="Published event name")
    published: bool = Field(description="Whether the event reached the bus")


class ProcessSummaryResponse(BaseModel):
    name: str
    case_type: str
    start_step: Optional[str]
    steps: List[str]
    events: List[str]
    listening: bool


class WorkItemResponse(BaseModel):
    id: str
    task_type: str
    status: str
    assignee_id: Optional[str] = None
    due_on: Optional[date] = None


class DeterminationResponse(BaseModel):
    id: str
    decision_method: str
    reason: str
    outcome: str
    determination_data: Dict[str, Any]
    determined_at: datetime
    determined_by_id: Optional[str] = None


class RecordDeterminationRequest(BaseModel):
    """判定の記録リクエスト"""
    decision_method: str = Field(description="attestation, automated or staff_review")
    reason: str
    outcome: str
    determination_data: Dict[str, Any] = Field(default_factory=dict)
    determined_by_id: Optional[str] = None


class CaseResponse(BaseModel):
    id: str
    case_type: str
    application_form_id: Optional[str] = None
    current_step: Optional[str] = None
    step_label: str = ""
    status: str
    pending_work_items: List[WorkItemResponse] = Field(default_factory=list)
    determinations: List[DeterminationResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class FlowNavigationRequest(BaseModel):
    """フォームフロー内の現在位置"""
    record_id: str = Field(description="Application form id")
    completed_pages: List[str] = Field(default_factory=list, description="Pages the form already passes validation for")
    answers: Dict[str, Any] = Field(default_factory=dict, description="Answers read by needed_if predicates")
    action: Optional[str] = Field(default=None, description="edit_<page> or update_<page> currently shown")


class TaskStatusResponse(BaseModel):
    name: str
    number: int
    started: bool
    completed: bool
    path: Optional[str] = None


class FlowNavigationResponse(BaseModel):
    completed: bool
    start_path: str
    end_path: Optional[str] = None
    tasks: List[TaskStatusResponse]
    next_path: Optional[str] = None
    prev_path: Optional[str] = None
    update_path: Optional[str] = None


app = FastAPI(
    title="caseflow",
    description="Event-driven business processes and multi-page form flows",
    version="1.0.0"
)

# 設定
SETTINGS = Settings.from_env()
setup_console_logging(SETTINGS.log_level)
LOGGER = LoguruLogger()
EVENT_BUS = InMemoryEventBus(logger=LOGGER)
CASE_REPOSITORY = InMemoryCaseRepository()
WORK_QUEUE = InMemoryStaffWorkQueue(EVENT_BUS)
IDEMPOTENCY_STORE = InMemoryIdempotencyStore()
PROCESS_CATALOG = ProcessCatalog()
FLOWS: Dict[str, ApplicationFormFlow] = {}
ROUTES = PathRouteResolver(SETTINGS.route_prefix)


class ApplicationForm:
    """
    フォームの状態をリクエストから復元したレコード

    Pages listed as completed validate; answers are exposed as attributes
    for needed_if predicates.
    """

    def __init__(self, id: str, completed_pages: List[str], answers: Dict[str, Any]):
        self.id = id
        self._completed = set(completed_pages)
        self._answers = dict(answers)

    def __getattr__(self, name: str) -> Any:
        answers = self.__dict__.get("_answers", {})
        if name in answers:
            return answers[name]
        raise AttributeError(name)

    def is_valid(self, context: Optional[str] = None) -> bool:
        return context is None or context in self._completed


def load_definitions(definitions_dir: Path) -> None:
    registry = DefinitionLoaderRegistry(task_creator_factory=WORK_QUEUE.for_task_type)
    loaded = load_directory(definitions_dir, registry)

    for definition in loaded.processes.values():
        process = BusinessProcess(
            definition,
            event_bus=EVENT_BUS,
            cases=CASE_REPOSITORY,
            logger=LOGGER,
        )
        PROCESS_CATALOG.register(process, replace=True)
        process.start_listening_for_events()

    FLOWS.update(loaded.flows)
    LOGGER.info(
        "definitions.loaded",
        directory=str(definitions_dir),
        processes=sorted(loaded.processes),
        flows=sorted(loaded.flows),
    )


load_definitions(SETTINGS.definitions_dir)


def _get_process(name: str) -> BusinessProcess:
    try:
        return PROCESS_CATALOG.get(name)
    except ProcessNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _get_flow(name: str) -> ApplicationFormFlow:
    flow = FLOWS.get(name)
    if flow is None:
        raise HTTPException(status_code=404, detail=str(FlowNotFoundError(f"Flow not found: {name}")))
    return flow


def _build_work_item_response(item: StaffWorkItem) -> WorkItemResponse:
    return WorkItemResponse(
        id=item.id,
        task_type=item.task_type,
        status=item.status.value,
        assignee_id=item.assignee_id,
        due_on=item.due_on,
    )


def _build_determination_response(determination: Determination) -> DeterminationResponse:
    return DeterminationResponse(
        id=determination.id,
        decision_method=determination.decision_method.value,
        reason=determination.reason,
        outcome=determination.outcome,
        determination_data=dict(determination.determination_data),
        determined_at=determination.determined_at,
        determined_by_id=determination.determined_by_id,
    )


def _build_case_response(case: Case) -> CaseResponse:
    process = PROCESS_CATALOG.for_case_type(case.case_type)
    label = process.describe_step(case.current_step) if process and case.current_step else ""
    return CaseResponse(
        id=case.id,
        case_type=case.case_type,
        application_form_id=case.application_form_id,
        current_step=case.current_step,
        step_label=label,
        status=case.status.value,
        pending_work_items=[_build_work_item_response(item) for item in WORK_QUEUE.pending_for_case(case.id)],
        determinations=[_build_determination_response(d) for d in case.determinations],
        created_at=case.created_at,
        updated_at=case.updated_at,
    )


@app.get("/")
def read_root():
    """ヘルスチェック"""
    return {"status": "ok", "service": "caseflow"}


@app.get("/processes", response_model=List[ProcessSummaryResponse])
def list_processes() -> List[ProcessSummaryResponse]:
    summaries = []
    for name in PROCESS_CATALOG.names():
        process = PROCESS_CATALOG.get(name)
        definition = process.definition
        summaries.append(
            ProcessSummaryResponse(
                name=definition.name,
                case_type=definition.case_type,
                start_step=definition.start_step,
                steps=list(definition.steps),
                events=definition.event_names(),
                listening=process.is_listening,
            )
        )
    return summaries


@app.get("/processes/{name}/diagram", response_class=PlainTextResponse)
def get_process_diagram(name: str) -> str:
    return _get_process(name).to_diagram()


@app.get("/flows/{name}/diagram", response_class=PlainTextResponse)
def get_flow_diagram(name: str) -> str:
    return flow_to_mermaid(_get_flow(name))


@app.post("/flows/{name}/navigation", response_model=FlowNavigationResponse)
def navigate_flow(name: str, request: FlowNavigationRequest = Body(...)) -> FlowNavigationResponse:
    """
    フォームフローのナビゲーション

    Task list state for the form, plus previous/next locations around the
    page named by ``action``.
    """
    flow = _get_flow(name)
    record = ApplicationForm(request.record_id, request.completed_pages, request.answers)
    progress = FlowProgress(flow, record, ROUTES)

    response = FlowNavigationResponse(
        completed=progress.completed(),
        start_path=progress.start_path(),
        end_path=progress.end_path(),
        tasks=[TaskStatusResponse(**asdict(status)) for status in progress.task_statuses()],
    )
    if request.action:
        evaluator = progress.evaluator_for(request.action)
        if evaluator is None:
            raise HTTPException(status_code=404, detail=f"Unknown page action for flow {name}: {request.action}")
        response.next_path = progress.after_update_path(request.action)
        response.prev_path = evaluator.prev_path() or progress.start_path()
        response.update_path = evaluator.update_path()
    return response


@app.post("/events/{event_name}", response_model=PublishEventResponse)
def publish_event(event_name: str, request: PublishEventRequest = Body(...)) -> PublishEventResponse:
    """
    イベントを発行する

    Start events create a case; any other event moves the cases it names
    along their process.
    """
    logger = LOGGER.bind(event_name=event_name)
    try:
        # an invalid payload must not use up the idempotency key
        event = Event.from_payload(event_name, request.payload)

        if request.idempotency_key:
            idempotency = IdempotencyService(IDEMPOTENCY_STORE)
            idempotency.register_or_raise(event_name, IdempotencyKey(request.idempotency_key))

        EVENT_BUS.publish_event(event)
        return PublishEventResponse(event=event_name, published=True)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IdempotencyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ConfigurationError as e:
        logger.error("event.configuration_error", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/cases", response_model=List[CaseResponse])
def list_cases() -> List[CaseResponse]:
    return [_build_case_response(case) for case in CASE_REPOSITORY.list()]


@app.get("/cases/{case_id}", response_model=CaseResponse)
def get_case(case_id: str) -> CaseResponse:
    case = CASE_REPOSITORY.get(case_id)
    if case is None:
        raise HTTPException(status_code=404, detail=f"Case not found: {case_id}")
    return _build_case_response(case)


@app.post("/cases/{case_id}/determinations", response_model=DeterminationResponse)
def record_determination(case_id: str, request: RecordDeterminationRequest = Body(...)) -> DeterminationResponse:
    case = CASE_REPOSITORY.get(case_id)
    if case is None:
        raise HTTPException(status_code=404, detail=f"Case not found: {case_id}")
    try:
        determination = case.record_determination(
            decision_method=request.decision_method,
            reason=request.reason,
            outcome=request.outcome,
            determination_data=request.determination_data,
            determined_by_id=request.determined_by_id,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    CASE_REPOSITORY.save(case)
    LOGGER.info(
        "case.determination_recorded",
        case_id=case.id,
        decision_method=determination.decision_method.value,
        outcome=determination.outcome,
    )
    return _build_determination_response(determination)


def _change_work_item(change, item_id: str) -> WorkItemResponse:
    try:
        item = change(item_id)
    except ValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_work_item_response(item)


@app.post("/work-items/{item_id}/complete", response_model=WorkItemResponse)
def complete_work_item(item_id: str) -> WorkItemResponse:
    return _change_work_item(WORK_QUEUE.complete, item_id)


@app.post("/work-items/{item_id}/hold", response_model=WorkItemResponse)
def hold_work_item(item_id: str) -> WorkItemResponse:
    return _change_work_item(WORK_QUEUE.hold, item_id)


@app.post("/work-items/{item_id}/reopen", response_model=WorkItemResponse)
def reopen_work_item(item_id: str) -> WorkItemResponse:
    return _change_work_item(WORK_QUEUE.reopen, item_id)
