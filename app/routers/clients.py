# app/routers/clients.py
"""Client monthly contracts and their expiration alerts."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.contract import ClientContractCreate, ContractRenew, ContractOut, ContractAlertOut
from app.services import client_service

router = APIRouter()


@router.post("/clients", response_model=ContractOut, status_code=201, summary="Register a client and contract")
async def create_client(body: ClientContractCreate, db: Session = Depends(get_db)):
    return await client_service.create_client_contract(
        db,
        full_name=body.full_name,
        email=body.email,
        site_id=body.site_id,
        start_date=body.start_date,
        end_date=body.end_date,
        monthly_fee=body.monthly_fee,
        plan_name=body.plan_name,
    )


@router.get("/clients/contracts", response_model=list[ContractOut], summary="All contracts, soonest expiry first")
def list_contracts(db: Session = Depends(get_db)):
    """Re-syncs every contract's status and alerts before listing."""
    return client_service.list_contracts(db)


@router.get("/clients/contracts/alerts", response_model=list[ContractAlertOut], summary="Pending contract alerts")
def list_alerts(db: Session = Depends(get_db)):
    return client_service.list_alerts(db)


@router.patch("/clients/contracts/{contract_id}/renew", response_model=ContractOut, summary="Renew a contract")
async def renew_contract(contract_id: int, body: ContractRenew, db: Session = Depends(get_db)):
    return await client_service.renew_contract(
        db, contract_id, body.new_end_date, body.payment_date, body.monthly_fee
    )
