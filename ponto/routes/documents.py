"""
Brazilian document validation routes.
"""
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..services.documents import format_cnpj, format_cpf, validate_cnpj, validate_cpf

router = APIRouter(prefix="/documents", tags=["documents"])


class DocumentIn(BaseModel):
    cpf: Optional[str] = None
    cnpj: Optional[str] = None


@router.post("/validate")
def validate_document(payload: DocumentIn):
    if payload.cpf is not None:
        return {"kind": "cpf", "valid": validate_cpf(payload.cpf), "formatted": format_cpf(payload.cpf)}
    if payload.cnpj is not None:
        return {"kind": "cnpj", "valid": validate_cnpj(payload.cnpj), "formatted": format_cnpj(payload.cnpj)}
    raise HTTPException(status_code=400, detail="Provide cpf or cnpj")
