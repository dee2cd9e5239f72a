from typing import TypedDict, List, Optional
from langchain_core.messages import BaseMessage

from .schemas import GenerationOutcome, ProviderAttempt, ProviderCallResult, ProviderConfig

class GenerationState(TypedDict):
    # 입력 데이터
    topic: str
    messages: List[BaseMessage]
    providers: List[ProviderConfig] # 우선순위 순서

    # 진행 상태
    stage: str
    provider_index: int # 다음에 선택할 프로바이더 위치
    current_provider: Optional[ProviderConfig]
    attempt: int # 현재 프로바이더 호출 횟수
    last_call: Optional[ProviderCallResult]
    last_error: Optional[str]
    attempts: List[ProviderAttempt]

    # 최종 결과
    outcome: Optional[GenerationOutcome]
