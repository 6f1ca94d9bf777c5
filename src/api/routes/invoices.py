"""Invoice API Routes

FastAPI routes for invoices: manual creation and migration import, draft
editing, status changes, monthly and single-lesson generation, PDF
rendering and the bookkeeping export.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.invoice_request import (
    GenerateLessonInvoiceRequestSchema,
    InvoiceStatusRequestSchema,
    UpdateInvoiceRequestSchema,
)
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    DeleteInvoiceCommandDTO,
    DeleteInvoiceResponseDTO,
    ExportInvoicesCommandDTO,
    GenerateLessonInvoiceCommandDTO,
    GenerateMonthlyInvoicesCommandDTO,
    InvoiceResponseDTO,
    MonthlyInvoicesResultDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.app.use_cases.invoicing import (
    CreateInvoice,
    DeleteInvoice,
    ExportInvoices,
    GenerateInvoicePdf,
    GenerateLessonInvoice,
    GenerateMonthlyInvoices,
    GetInvoice,
    LessonInvoicer,
    UpdateInvoice,
    UpdateInvoiceStatus,
)
from src.adapter.repositories import (
    SqlAlchemyCompanySettingsRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLessonRepository,
    SqlAlchemyWorkspaceRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import build_numbering_service, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_EXAMPLE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice 123 not found"
                }
            }
        }
    }
}

NOT_DRAFT_EXAMPLE = {
    "description": "Invoice is not a draft",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_DRAFT",
                    "message": "Only draft invoices can be deleted. Cancel sent invoices instead."
                }
            }
        }
    }
}


def _build_invoicer(session: AsyncSession) -> LessonInvoicer:
    return LessonInvoicer(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyLessonRepository(session),
        build_numbering_service(session),
    )


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Invoice number already used",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DUPLICATE_INVOICE_NUMBER",
                            "message": "Invoice number 25/09/5060 already exists"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    command: CreateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Create an invoice from explicit line items.

    Without `manual_invoice_number` the number is `YY/MM/n`, with YY/MM from
    the invoice date and n drawn from the workspace counter. With it, the
    number is imported as-is; if it ends in `/n` the counter moves past n.

    Totals are computed from the items (amounts in cents):
    - line total = round(quantity x unit_price)
    - line tax = round(line total x tax_rate / 100)

    **Returns:**
    - 201: Invoice created
    - 404: Customer not found in the workspace
    - 409: Invoice number already used
    """
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyCustomerRepository(session),
        build_numbering_service(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/generate-monthly",
    response_model=MonthlyInvoicesResultDTO,
    status_code=status.HTTP_200_OK,
)
async def generate_monthly_invoices(
    command: GenerateMonthlyInvoicesCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Generate the draft invoices of one workspace month.

    One invoice per customer with billable, un-invoiced lessons starting in
    the month. Lessons are linked to their invoice, so calling this again
    for the same month creates no further invoices.

    **Example request:**
    ```json
    {"workspace_id": 1, "year": 2025, "month": 3}
    ```
    """
    use_case = GenerateMonthlyInvoices(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWorkspaceRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyLessonRepository(session),
        _build_invoicer(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/from-lesson/{lesson_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def generate_lesson_invoice(
    lesson_id: int,
    request: Optional[GenerateLessonInvoiceRequestSchema] = None,
    session: AsyncSession = Depends(get_session)
):
    """
    Invoice a single billable, un-invoiced lesson right away.

    **Returns:**
    - 201: Invoice created
    - 404: Lesson not found
    - 409: Lesson not billable or already invoiced
    """
    use_case = GenerateLessonInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLessonRepository(session),
        SqlAlchemyCustomerRepository(session),
        _build_invoicer(session),
    )
    command = GenerateLessonInvoiceCommandDTO(
        lesson_id=lesson_id,
        user_id=request.user_id if request else None,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/export",
    responses={200: {"content": {"text/csv": {}}, "description": "Booking lines"}},
)
async def export_invoices(
    command: ExportInvoicesCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Export invoices for external accounting software.

    One semicolon-separated line per invoice, ISO-8859-1 encoded, CRLF
    terminated:
    `{total};S;{revenue account};{debtor account};{DDMMYYYY};{number};{customer}`
    """
    use_case = ExportInvoices(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyCustomerRepository(session),
        revenue_account=ApplicationConfig.EXPORT_REVENUE_ACCOUNT,
        debtor_account=ApplicationConfig.EXPORT_DEBTOR_ACCOUNT,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    export = result.value
    headers = {"Content-Disposition": 'attachment; filename="invoices_export.csv"'}
    if export.missing_invoice_ids:
        headers["X-Missing-Invoice-Ids"] = ",".join(str(i) for i in export.missing_invoice_ids)

    return Response(
        content=export.content.encode("latin-1", errors="replace"),
        media_type="text/csv; charset=iso-8859-1",
        headers=headers,
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_EXAMPLE},
)
async def get_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Retrieve an invoice with its items."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_EXAMPLE, 409: NOT_DRAFT_EXAMPLE},
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Edit a draft invoice.

    Items replace the existing items; totals are recomputed. Non-draft
    invoices cannot be edited.
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    command = UpdateInvoiceCommandDTO(invoice_id=invoice_id, **request.model_dump())
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_EXAMPLE},
)
async def update_invoice_status(
    invoice_id: int,
    request: InvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Change the invoice status (draft, sent, paid, cancelled, archived).

    `sent_at` and `paid_at` are set the first time the invoice becomes sent
    or paid.
    """
    use_case = UpdateInvoiceStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    command = UpdateInvoiceStatusCommandDTO(
        invoice_id=invoice_id,
        status=request.status,
        user_id=request.user_id,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    response_model=DeleteInvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_EXAMPLE, 409: NOT_DRAFT_EXAMPLE},
)
async def delete_invoice(
    invoice_id: int,
    user_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session)
):
    """
    Delete a draft invoice.

    Its lessons are unlinked and will be picked up by the next generator run.
    """
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyLessonRepository(session),
    )
    result = await use_case.execute(DeleteInvoiceCommandDTO(invoice_id=invoice_id, user_id=user_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_EXAMPLE,
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    Download an invoice as PDF file.

    Draft invoices are labelled as drafts.
    """
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyCompanySettingsRepository(session),
        ReportLabPdfService(),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.value.filename}"'},
    )
