from fastapi import APIRouter
from starlette.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST, Counter

router = APIRouter(tags=["metrics"])

# incremented by the services after a successful commit
STUDENTS_REGISTERED = Counter(
    "students_registered_total", "Students created through re-registration"
)
STUDENT_CARDS_ISSUED = Counter("student_cards_issued_total", "Student ID cards issued")
STUDENTS_DELETED = Counter(
    "students_deleted_total", "Students removed together with their dependents"
)
IDENTIFIERS_GENERATED = Counter(
    "identifiers_generated_total", "Sequential identifiers allocated", ["series"]
)


@router.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
