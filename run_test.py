import sys
import asyncio
from dotenv import load_dotenv
load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging
from app.engine.orchestrator import GenerationOrchestrator
from app.engine.providers import ProviderRegistry


async def main(topic: str):
    setup_logging()
    orchestrator = GenerationOrchestrator(ProviderRegistry(settings))
    final_state = await orchestrator.run(topic)

    print(f"\n[1] 프로바이더 시도 기록")
    for attempt in final_state["attempts"]:
        print(f"- {attempt.provider} #{attempt.attempt}: {attempt.status} {attempt.error or ''}")

    outcome = final_state["outcome"]
    print(f"\n[2] 결과: {'성공' if outcome.success else '실패'}")
    if not outcome.success:
        print(f"- 에러: {outcome.error}")
        return

    post = outcome.post
    print(f"- 프로바이더: {post.provider}")
    print(f"- 제목: {post.title}")
    print(f"- 요약: {post.excerpt}")
    print(f"- 태그: {post.tags}")
    print(f"- 본문 샘플: {post.content[:200]}...")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "ai-tools"))
