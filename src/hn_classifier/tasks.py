"""Task functions executed as flow steps.

Each task is a plain async function of JSON-shaped arguments, so the same
code runs inside the workflow engine and in the replay tooling.
"""

from typing import Optional

from hn_classifier.adapters.llm import OpenAIClient
from hn_classifier.adapters.sources import HackerNewsSource
from hn_classifier.config import Settings, get_settings
from hn_classifier.core import (
    ClassificationResult,
    HnApiComment,
    HnComment,
    HnItem,
    HnItemNotFoundError,
    HnStory,
    ItemSource,
    LLMClient,
    clean_html,
    extract_item_id,
)
from hn_classifier.prompts import render_prompt


def default_source(settings: Optional[Settings] = None) -> HackerNewsSource:
    settings = settings or get_settings()
    return HackerNewsSource(
        api_base=settings.hacker_news.api_base,
        timeout=settings.hacker_news.timeout,
    )


async def fetch_hn_item(url: str, source: Optional[ItemSource] = None) -> HnItem:
    """Fetch the HN story behind ``url`` for classification.

    Deleted or dead stories come back as an empty item rather than an error.
    """
    item_id = extract_item_id(url)
    source = source or default_source()

    data = await source.fetch_item(item_id)
    if not data:
        raise HnItemNotFoundError(item_id)

    story = HnStory.model_validate(data)
    if story.deleted or story.dead:
        return HnItem.empty(item_id)

    return HnItem(
        id=story.id,
        title=story.title,
        by=story.by,
        time=story.time,
        score=story.score,
    )


async def fetch_hn_first_comment(url: str, source: Optional[ItemSource] = None) -> HnComment:
    """Fetch the first top-level comment for additional context."""
    item_id = extract_item_id(url)
    source = source or default_source()

    story_data = await source.fetch_item(item_id)
    if not story_data:
        return HnComment.empty()

    story = HnStory.model_validate(story_data)
    if story.deleted or story.dead or not story.kids:
        return HnComment.empty()

    comment_data = await source.fetch_item(story.kids[0])
    if not comment_data:
        return HnComment.empty()

    comment = HnApiComment.model_validate(comment_data)
    if comment.deleted or comment.dead:
        return HnComment.empty()

    return HnComment(by=comment.by, text=clean_html(comment.text) if comment.text else "")


async def classify(
    title: str,
    first_comment_text: str,
    llm_client: Optional[LLMClient] = None,
    settings: Optional[Settings] = None,
) -> ClassificationResult:
    """v1 classification: conservative baseline prompt on the default model."""
    settings = settings or get_settings()
    llm_client = llm_client or OpenAIClient(settings)
    prompt = render_prompt(settings.prompts.classify, title, first_comment_text)
    return await llm_client.generate_classification(prompt, model=settings.openai.model)


async def classify_v2(
    title: str,
    first_comment_text: str,
    model: str = "gpt-5-mini",
    llm_client: Optional[LLMClient] = None,
    settings: Optional[Settings] = None,
) -> ClassificationResult:
    """v2 classification: detailed rubric with stricter criteria.

    Args:
        title: HN story title
        first_comment_text: text of the first comment (may be empty)
        model: OpenAI model to use
    """
    settings = settings or get_settings()
    llm_client = llm_client or OpenAIClient(settings)
    prompt = render_prompt(settings.prompts.classify_v2, title, first_comment_text)
    return await llm_client.generate_classification(prompt, model=model)
