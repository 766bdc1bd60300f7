from fastapi import APIRouter, HTTPException, Request, status

from app.core.rate_limit import rate_limit
from app.schemas.resume import AIEnhanceRequest, AIEnhanceResponse, EnhanceResponse, ResumeDraft
from app.services.enhance_llm import EnhanceLLMError
from app.services.resume_service import run_ai_enhance, run_rule_enhance

router = APIRouter()

_LLM_ERROR_STATUS = {
    "llm_disabled": status.HTTP_503_SERVICE_UNAVAILABLE,
    "llm_rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
    "llm_quota": status.HTTP_402_PAYMENT_REQUIRED,
    "llm_invalid": status.HTTP_502_BAD_GATEWAY,
    "llm_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.post("/resume/enhance", response_model=EnhanceResponse)
@rate_limit("30/minute")
def resume_enhance(request: Request, payload: ResumeDraft):
    _ = request
    return run_rule_enhance(payload)


@router.post("/resume/ai-enhance", response_model=AIEnhanceResponse)
@rate_limit("10/minute")
def resume_ai_enhance(request: Request, payload: AIEnhanceRequest):
    _ = request
    try:
        return run_ai_enhance(payload.content)
    except EnhanceLLMError as exc:
        code = _LLM_ERROR_STATUS.get(exc.code, status.HTTP_503_SERVICE_UNAVAILABLE)
        raise HTTPException(status_code=code, detail=str(exc)) from exc
