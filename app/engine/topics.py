import re
from typing import List

from .schemas import Topic

BLOG_TOPICS: List[Topic] = [
    Topic(id="web-development", name="Web Development", description="HTML, CSS, JavaScript, frameworks"),
    Topic(id="productivity", name="Productivity Tools", description="Tips and tools for better workflow"),
    Topic(id="programming", name="Programming", description="Coding tutorials and best practices"),
    Topic(id="design", name="Design", description="UI/UX, graphics, and visual design"),
    Topic(id="seo", name="SEO & Marketing", description="Search optimization and digital marketing"),
    Topic(id="ai-tools", name="AI Tools", description="Artificial intelligence and automation"),
    Topic(id="security", name="Cybersecurity", description="Online safety and data protection"),
    Topic(id="tutorials", name="Tutorials", description="Step-by-step guides and how-tos"),
]

_TOPICS_BY_ID = {t.id: t for t in BLOG_TOPICS}


def list_topics() -> List[Topic]:
    """기본 제공 토픽 목록"""
    return list(BLOG_TOPICS)


def resolve_topic(topic: str) -> Topic:
    """
    토픽 ID를 기본 토픽 테이블에서 찾습니다.
    목록에 없는 토픽은 입력 문자열을 그대로 id, name, description으로 사용합니다.
    """
    known = _TOPICS_BY_ID.get(topic)
    if known:
        return known
    return Topic(id=topic, name=topic, description=topic)


def slugify(value: str) -> str:
    """소문자로 바꾸고 영숫자가 아닌 구간을 '-'로 치환합니다."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
