from langgraph.graph import StateGraph, END
from .state import GenerationState
from .nodes import GenerationNodes


def create_generation_graph(nodes: GenerationNodes):
    workflow = StateGraph(GenerationState)

    # 1. 노드 등록
    workflow.add_node("select_provider", nodes.select_provider)
    workflow.add_node("pace", nodes.pace)
    workflow.add_node("call", nodes.call)
    workflow.add_node("backoff", nodes.backoff)
    workflow.add_node("accept", nodes.accept)
    workflow.add_node("fail", nodes.fail)

    # 2. 시작점 설정
    workflow.set_entry_point("select_provider")

    # 3. 프로바이더 선택 (소진 시 실패 처리)
    workflow.add_conditional_edges(
        "select_provider",
        nodes.route_after_select,
        {
            "pace": "pace",
            "exhausted": "fail"
        }
    )

    # 4. 대기 후 호출
    workflow.add_edge("pace", "call")

    # 5. 호출 결과에 따라 분기
    workflow.add_conditional_edges(
        "call",
        nodes.route_after_call,
        {
            "accept": "accept",
            "retry": "backoff",
            "next_provider": "select_provider"
        }
    )
    workflow.add_edge("backoff", "call")

    # 6. 종료
    workflow.add_edge("accept", END)
    workflow.add_edge("fail", END)

    return workflow.compile()


def recursion_limit_for(provider_count: int, max_retries: int) -> int:
    """프로바이더 수와 재시도 한도로 필요한 최대 스텝 수 계산"""
    # 프로바이더당 select + pace + call(1 + 재시도) + backoff(재시도), 마지막 select + fail
    per_provider = 3 + 2 * max_retries
    return provider_count * per_provider + 2 + 5
