"""Instruction templates for the classification tasks.

Placeholders: ``{title}`` and ``{first_comment}``.
"""

CLASSIFY_PROMPT = """Task: Extract structured information about this Hacker News story.
Return ONLY json matching provided schema.
Use firstCommentContent (if provided) to enrich the output and guide extraction.

Signals for AI: AI, LLM, model, agents, ML/DL, RAG, embeddings, vector DB, inference,
fine-tune, tokenizer, safety/policy, model release, compute, AGI, OpenAI, GPT, Anthropic, Claude etc.

Prefer precision over recall. If unsure -> ai_related=false, hype_meter<=3.

Title: "{title}"
First comment (may be empty): "{first_comment}\""""

# Stricter rubric used when replaying stored runs across models.
CLASSIFY_V2_PROMPT = """Task: Classify this Hacker News story with high precision for AI-related content.

CLASSIFICATION CRITERIA:
- AI-related: Must contain explicit AI/ML technology discussion, not just tangential mentions
- Hype meter (1-10): Based on claim magnitude, evidence quality, and community reaction
- Tags: Maximum 3 most relevant technical tags

EVALUATION FRAMEWORK:
1. Content Analysis:
   - Direct AI/ML implementation or research
   - Technical depth vs. surface-level discussion
   - Concrete examples vs. vague assertions

2. Hype Assessment:
   - 1-3: Incremental improvements, well-documented
   - 4-6: Significant advances with solid evidence
   - 7-9: Major breakthroughs, broad implications
   - 10: Paradigm shifts, extraordinary claims

3. Signal Keywords (high confidence):
   Primary: LLM, neural network, transformer, fine-tuning, embeddings
   Secondary: AI safety, AGI, model training, inference optimization

4. First Comment Context:
   - Technical expert validation/criticism
   - Implementation details or limitations
   - Comparative analysis with existing solutions

STRICT RULES:
- Require multiple AI signals for isAiRelated=true
- Discount pure business/funding announcements
- Weight technical substance over marketing language
- Use first comment to verify or adjust classification

Title: "{title}"
First comment: "{first_comment}\""""


def render_prompt(template: str, title: str, first_comment: str) -> str:
    """Fill a template with story data."""
    return template.format(title=title, first_comment=first_comment)
