from typing import List, Optional, Sequence
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate

from .schemas import GenerationPrompt, InternalLink
from .topics import resolve_topic

# ============================================================================
# 블로그 글 생성 프롬프트
# ============================================================================

BLOG_POST_SYSTEM_PROMPT = (
    "You are an expert SEO Content Strategist. Your tone is professional, engaging, "
    "and human-like. You write for beginners and marketers."
)

BLOG_POST_USER_PROMPT = """Write a comprehensive, 1200-word blog post about "{topic_name}".
Topic focus: {topic_description}

**Structure & Requirements:**
1.  **H1 Title**: Engaging and SEO-optimized.
2.  **Introduction**: Hook the reader immediately.
3.  **H2 & H3 Headers**: Use keywords naturally. Use Markdown `##` for H2 and `###` for H3.
4.  **Content**: Informative, actionable, and structured with bullet points. At least 1200 words.
5.  **SEO**: Use relevant keywords naturally throughout the text.
6.  **Conclusion**: Summarize key takeaways.
7.  **CTA**: Add a compelling Call to Action at the end.
8.  **Hashtags**: Generate 5 relevant hashtags and return them in "tags".
9.  **Links**: If relevant, include mentions of helpful resources (like YouTube or official docs).
{internal_links_section}
**REQUIRED OUTPUT FORMAT (JSON):**
Return ONLY a single JSON object, no commentary before or after it.
{{
  "title": "The Actual Blog Post Title",
  "excerpt": "A short, engaging summary of the post...",
  "content": "# Introduction\\n\\nThis is the full blog post content in Markdown format...",
  "metaTitle": "SEO Meta Title (optional, max 60 characters)",
  "metaDescription": "SEO Meta Description (max 160 characters)",
  "keywords": ["keyword one", "keyword two"],
  "tags": ["tag-one", "tag-two"],
  "readingTime": 5
}}

If you cannot output JSON, just write the Blog Post in Markdown."""

INTERNAL_LINKS_HEADER = (
    "\n**Internal Links** (weave these into the text ONLY if natural, never forced):\n"
)

BLOG_POST_TEMPLATE = ChatPromptTemplate.from_messages([
    ("system", BLOG_POST_SYSTEM_PROMPT),
    ("human", BLOG_POST_USER_PROMPT),
])


def format_internal_links(internal_links: Optional[Sequence[InternalLink]]) -> str:
    """내부 링크 목록을 Markdown 리스트로 변환 (없으면 빈 문자열)"""
    if not internal_links:
        return ""
    lines = [f"- [{link.anchor}]({link.url})" for link in internal_links]
    return INTERNAL_LINKS_HEADER + "\n".join(lines) + "\n"


class PromptBuilder:
    """토픽과 내부 링크 힌트로 생성 지시문을 조립합니다. 입력이 같으면 결과도 같습니다."""

    def build(
        self,
        topic: str,
        internal_links: Optional[Sequence[InternalLink]] = None,
    ) -> GenerationPrompt:
        topic_info = resolve_topic(topic)
        system_message, human_message = BLOG_POST_TEMPLATE.format_messages(
            topic_name=topic_info.name,
            topic_description=topic_info.description,
            internal_links_section=format_internal_links(internal_links),
        )
        return GenerationPrompt(
            system_instruction=system_message.content,
            user_instruction=human_message.content,
        )

    @staticmethod
    def to_messages(prompt: GenerationPrompt) -> List[BaseMessage]:
        return [
            SystemMessage(content=prompt.system_instruction),
            HumanMessage(content=prompt.user_instruction),
        ]


prompt_builder = PromptBuilder()
