import time
from typing import Any, TypeVar
from uuid import UUID

import litellm
import pydantic
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from zenith.core.core import Service
from zenith.core.i18n import Language
from zenith.core.modules.llm.models import (
    JournalAnalysis,
    JournalAnalysisInput,
    LLMLog,
    LLMOperationType,
    MeditationRecommendation,
    RecommendationInput,
)
from zenith.core.modules.llm.prompts import (
    build_journal_analysis_prompt,
    build_journal_analysis_request,
    build_recommendation_prompt,
    build_recommendation_request,
)
from zenith.core.modules.llm.utils import parse_json_response
from zenith.errors import ValidationError

logger = structlog.get_logger(__name__)

OutputT = TypeVar("OutputT", bound=pydantic.BaseModel)


class LLMService(Service):
    """Prompt-templated calls to the generative-AI service, with structured JSON output."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("llm_logs")

    async def on_start(self) -> None:
        """Create indexes for LLM logs."""
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("created_at", -1)])

    async def get_recommendation(
        self, data: RecommendationInput, user_id: UUID, language: Language
    ) -> MeditationRecommendation:
        """Recommend a meditation session for the given mood and time of day."""
        return await self._complete(
            operation_type=LLMOperationType.MEDITATION_RECOMMENDATION,
            system_prompt=build_recommendation_prompt(language),
            user_input=build_recommendation_request(data),
            user_id=user_id,
            output_model=MeditationRecommendation,
        )

    async def analyze_journal_entry(self, data: JournalAnalysisInput, user_id: UUID, language: Language) -> JournalAnalysis:
        """Summarize a journal entry, analyze its themes and offer one piece of advice."""
        return await self._complete(
            operation_type=LLMOperationType.JOURNAL_ANALYSIS,
            system_prompt=build_journal_analysis_prompt(language),
            user_input=build_journal_analysis_request(data),
            user_id=user_id,
            output_model=JournalAnalysis,
        )

    async def _complete(
        self,
        operation_type: LLMOperationType,
        system_prompt: str,
        user_input: str,
        user_id: UUID,
        output_model: type[OutputT],
    ) -> OutputT:
        """
        Run one completion and validate it against `output_model`.

        Every call, successful or not, is recorded in llm_logs. Errors are
        re-raised for the caller to turn into a user-facing message.
        """
        start_time = time.time()
        llm_response_content = None
        parsed_data = None
        usage_tokens = None
        error_message = None

        try:
            if not self.core.config.llm_api_key:
                raise ValidationError("LLM API key not configured")  # noqa: TRY301

            response = await litellm.acompletion(
                model=self.core.config.llm_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_input},
                ],
                api_key=self.core.config.llm_api_key,
                response_format={"type": "json_object"},
            )

            usage = getattr(response, "usage", None)
            if usage:
                usage_tokens = (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens)

            llm_response_content = response.choices[0].message.content
            if not llm_response_content:
                raise ValidationError("LLM returned empty response")  # noqa: TRY301

            parsed_data = parse_json_response(llm_response_content)
            try:
                return output_model.model_validate(parsed_data)
            except pydantic.ValidationError as e:
                raise ValidationError(f"LLM response does not match {output_model.__name__}") from e

        except Exception as e:
            error_message = str(e)
            logger.warning("llm_call_failed", operation_type=operation_type, error=error_message)
            raise

        finally:
            log = LLMLog(
                user_input=user_input,
                llm_response=llm_response_content,
                parsed_response=parsed_data,
                user_id=user_id,
                operation_type=operation_type,
                system_prompt=system_prompt,
                model=self.core.config.llm_model,
                prompt_tokens=usage_tokens[0] if usage_tokens else None,
                completion_tokens=usage_tokens[1] if usage_tokens else None,
                total_tokens=usage_tokens[2] if usage_tokens else None,
                error_message=error_message,
                duration_ms=int((time.time() - start_time) * 1000),
            )
            try:
                await self._collection.insert_one(log.to_mongo())
            except PyMongoError:
                logger.exception("llm_log_failed", operation_type=operation_type)
