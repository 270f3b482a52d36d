"""JSON endpoints over the loaded semantic map.

These read the controller's current state.  If nothing has been loaded yet
the first request triggers a load; they never change the selection.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.models import ErrorResponse, GroupOut, StateOut, VariableOut, groups_out
from api.viewer import ViewerSession, get_viewer
from viewer.controller import Phase, ViewState

router = APIRouter(tags=["variables"])

_NOT_LOADED = {503: {"model": ErrorResponse, "description": "The semantic map failed to load"}}


def _loaded_state(viewer: ViewerSession) -> ViewState:
    with viewer.locked() as controller:
        if controller.state.phase is Phase.LOADING:
            controller.load_and_render()
        state = controller.state
    if state.phase is Phase.FAILED:
        raise HTTPException(status_code=503, detail=state.error)
    return state


@router.get(
    "/groups",
    response_model=list[GroupOut],
    summary="Variables grouped by aesthetic label",
    response_description="Groups in display order with their variables",
    responses=_NOT_LOADED,
)
def list_groups(viewer: ViewerSession = Depends(get_viewer)) -> list[GroupOut]:
    state = _loaded_state(viewer)
    return groups_out(state.dataset, state.groups)


@router.get(
    "/variables/{var_name:path}",
    response_model=VariableOut,
    summary="Semantic detail for one variable",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown variable"},
        **_NOT_LOADED,
    },
)
def get_variable(var_name: str, viewer: ViewerSession = Depends(get_viewer)) -> VariableOut:
    """Return class, schema reconstruction, and value mappings for *var_name*."""
    state = _loaded_state(viewer)
    variable = state.dataset.variables.get(var_name)
    if variable is None:
        raise HTTPException(status_code=404, detail=f"Variable {var_name!r} not found")
    return VariableOut.from_variable(var_name, variable)


@router.get("/state", response_model=StateOut, summary="Current view state")
def get_state(viewer: ViewerSession = Depends(get_viewer)) -> StateOut:
    """Report the page phase and selection without triggering a load."""
    with viewer.locked() as controller:
        return StateOut.from_state(controller.state)
