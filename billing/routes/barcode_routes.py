from fastapi import APIRouter, Depends

from billing.schemas import BillResponse, ContactRequest, ScanRequest
from state import RetailState, get_state

router = APIRouter(tags=["Billing"])


def bill_response(state: RetailState) -> BillResponse:
    bill = state.bill
    return BillResponse(
        items=bill.line_items,
        running_total=bill.running_total,
        contact_number=bill.contact_number,
        item_count=len(bill.line_items),
    )


@router.get("/scan/{tag}")
async def lookup_tag(tag: str, state: RetailState = Depends(get_state)):
    """
    Fetch catalog details for a scanned barcode/RFID without adding it to the bill.
    """
    product = state.catalog.lookup(tag)
    return {"tag": product.tag, "product": product}


@router.post("/scan")
async def scan_item(request: ScanRequest, state: RetailState = Depends(get_state)):
    """
    Add one unit of the scanned product to the active bill.
    """
    state.payments.ensure_bill_editable("add items")
    product = state.catalog.lookup(request.tag)
    item = state.bill.add_item(product.as_candidate())
    return {
        "message": f"{item.name} has been added to the bill.",
        "item": item,
        "bill": bill_response(state),
    }


@router.put("/contact")
async def set_contact(request: ContactRequest, state: RetailState = Depends(get_state)):
    state.payments.ensure_bill_editable("change the contact number")
    state.bill.set_contact_number(request.contact_number.strip())
    return bill_response(state)


@router.get("/bill", response_model=BillResponse)
async def get_bill(state: RetailState = Depends(get_state)):
    return bill_response(state)


@router.delete("/bill", response_model=BillResponse)
async def clear_bill(state: RetailState = Depends(get_state)):
    state.payments.abandon()
    state.bill.reset()
    return bill_response(state)
