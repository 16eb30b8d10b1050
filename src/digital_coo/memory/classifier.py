"""Document metadata classification using an LLM."""

import json
import logging
import re

from ..llm import LLMClient
from .models import DocumentMetadata

logger = logging.getLogger(__name__)

CLASSIFICATION_PROMPT = """Analyze the following document and provide:
1. A concise title (max 10 words)
2. A brief summary (max 50 words)
3. Relevant tags (5-10 tags)
4. Document type (e.g., meeting_notes, decision, report, research, etc.)

Return as JSON with keys: title, summary, tags (array), type

Document:
"""

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class DocumentClassifier:
    """Derives title, summary, tags and type for a document."""

    def __init__(self, llm: LLMClient | None) -> None:
        """Initialize the classifier.

        Args:
            llm: Client used for the classification call. Without one every
                document gets the fallback metadata.
        """
        self.llm = llm

    async def classify(self, content: str) -> DocumentMetadata:
        """Classify a document.

        Args:
            content: The document body.

        Returns:
            Parsed metadata, or ``DocumentMetadata.fallback`` on any error.
        """
        if self.llm is None:
            return DocumentMetadata.fallback(content)

        try:
            response = await self.llm.complete(CLASSIFICATION_PROMPT + content)
        except Exception as e:
            logger.warning(f"Metadata generation failed: {e}")
            return DocumentMetadata.fallback(content)

        return self._parse_response(response, content)

    def _parse_response(self, response: str, content: str) -> DocumentMetadata:
        """Parse LLM output into metadata.

        Args:
            response: The raw LLM response.
            content: The original document, used for the fallback.

        Returns:
            Metadata, falling back to defaults on parse errors.
        """
        match = JSON_OBJECT_PATTERN.search(response or "")
        if not match:
            logger.warning("Metadata response contained no JSON object")
            return DocumentMetadata.fallback(content)

        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse metadata response: {e}")
            return DocumentMetadata.fallback(content)

        if not isinstance(data, dict):
            return DocumentMetadata.fallback(content)

        fallback = DocumentMetadata.fallback(content)
        tags = data.get("tags")
        if isinstance(tags, list) and tags:
            parsed_tags = tuple(str(tag) for tag in tags)
        else:
            parsed_tags = fallback.tags

        return DocumentMetadata(
            title=str(data.get("title") or fallback.title),
            summary=str(data.get("summary") or fallback.summary),
            tags=parsed_tags,
            type=str(data.get("type") or fallback.type),
        )
