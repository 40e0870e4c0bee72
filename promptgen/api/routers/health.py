from fastapi import APIRouter

from promptgen.schemas.enums import AppCategory, Provider, Verbosity

router = APIRouter(tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/options")
def list_options() -> dict:
    # choices the UI form renders in its selects
    return {
        "providers": [p.value for p in Provider],
        "app_categories": [c.value for c in AppCategory],
        "verbosity_levels": [v.value for v in Verbosity],
    }
