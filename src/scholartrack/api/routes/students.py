"""Student list, detail and CRUD endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from scholartrack.api.dependencies import (
    ListControllerDep,
    StudentServiceDep,
    require_authenticated,
)
from scholartrack.api.models import (
    APIResponse,
    FiltersUpdate,
    PageRequest,
    SortRequest,
    StudentDetail,
    StudentListView,
    StudentPayload,
    controller_to_list_view,
    student_to_detail,
)
from scholartrack.students import StudentForm, StudentListController

router = APIRouter(
    prefix="/students",
    tags=["students"],
    dependencies=[Depends(require_authenticated)],
)


def _list_view(controller: StudentListController) -> APIResponse[StudentListView]:
    return APIResponse(data=controller_to_list_view(controller), error=controller.error)


@router.get("", response_model=APIResponse[StudentListView])
async def list_students(controller: ListControllerDep) -> APIResponse[StudentListView]:
    """Current page of the student list (loaded on first visit)."""
    if not controller.loaded:
        await controller.load()
    return _list_view(controller)


@router.patch("/filters", response_model=APIResponse[StudentListView])
async def update_filters(
    filters: FiltersUpdate, controller: ListControllerDep
) -> APIResponse[StudentListView]:
    """Change search term, status or year filter."""
    await controller.set_filters(
        search_term=filters.search_term,
        status=filters.status,
        year=filters.year,
    )
    return _list_view(controller)


@router.delete("/filters", response_model=APIResponse[StudentListView])
async def clear_filters(controller: ListControllerDep) -> APIResponse[StudentListView]:
    """Clear all filters and restore the default sort."""
    await controller.clear_filters()
    return _list_view(controller)


@router.post("/sort", response_model=APIResponse[StudentListView])
async def sort_students(
    sort: SortRequest, controller: ListControllerDep
) -> APIResponse[StudentListView]:
    """Sort by a column; repeating the current column flips the direction."""
    await controller.sort_by(sort.field.value)
    return _list_view(controller)


@router.post("/page", response_model=APIResponse[StudentListView])
async def change_page(
    page: PageRequest, controller: ListControllerDep
) -> APIResponse[StudentListView]:
    """Change page size and/or go to a page. Out-of-range pages are ignored."""
    if page.limit is not None:
        await controller.set_page_size(page.limit)
    if page.page is not None:
        await controller.change_page(page.page)
    return _list_view(controller)


@router.post(
    "",
    response_model=APIResponse[StudentDetail],
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    payload: StudentPayload, controller: ListControllerDep
) -> APIResponse[StudentDetail] | JSONResponse:
    """Create a student after validating the form."""
    return await _submit(StudentForm(data=payload.to_form_data()), controller)


@router.get("/{student_id}", response_model=APIResponse[StudentDetail])
async def get_student(
    student_id: int, service: StudentServiceDep
) -> APIResponse[StudentDetail] | JSONResponse:
    """Student detail page."""
    result = await service.get_student_by_id(student_id)
    if not result.success or result.data is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](
                data=None, error=result.error or "Failed to load student details"
            ).model_dump(),
        )
    return APIResponse(data=student_to_detail(result.data))


@router.put("/{student_id}", response_model=APIResponse[StudentDetail])
async def update_student(
    student_id: int, payload: StudentPayload, controller: ListControllerDep
) -> APIResponse[StudentDetail] | JSONResponse:
    """Replace a student after validating the form."""
    return await _submit(StudentForm(data=payload.to_form_data(student_id)), controller)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: int, controller: ListControllerDep) -> Response:
    """Delete a student."""
    result = await controller.delete(student_id)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=result.error).model_dump(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _submit(
    form: StudentForm, controller: StudentListController
) -> APIResponse[StudentDetail] | JSONResponse:
    """Validate a form and save it through the list controller."""
    result = await form.submit(controller.save)

    if result is None:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=APIResponse[dict[str, str]](
                data=form.errors, error="Validation failed"
            ).model_dump(),
        )

    if not result.success or result.data is None:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=result.error).model_dump(),
        )

    return APIResponse(data=student_to_detail(result.data))
