from fastapi import APIRouter, HTTPException, Query

from chatelix.providers.catalog import find_model, models_by_category, models_by_vendor
from chatelix.providers.routing import resolve_binding
from chatelix.schemas.chat import BindingInfo, CatalogResponse, ModelDescriptor

router = APIRouter()


@router.get("/models", response_model=CatalogResponse)
async def get_models() -> CatalogResponse:
    """Catalog models grouped by vendor and by category."""
    return CatalogResponse(providers=models_by_vendor(), categories=models_by_category())


@router.get("/models/resolve", response_model=BindingInfo)
async def resolve_model(model: str = Query(..., min_length=1)) -> BindingInfo:
    binding = resolve_binding(model)
    return BindingInfo(model=model, provider=binding.provider.value, endpoint=binding.endpoint)


@router.get("/models/{model_id:path}", response_model=ModelDescriptor)
async def get_model(model_id: str) -> ModelDescriptor:
    model = find_model(model_id)
    if not model:
        raise HTTPException(status_code=404, detail="Model not found")
    return model
