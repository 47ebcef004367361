from dataclasses import dataclass
from functools import cached_property

from core.config_loader import AppConfig, LlmConfig
from core.llm.openai_service import OpenAIService
from core.retirement import AdvisorCalendar, IncentiveCalculator
from etl.resume import ResumeParser
from storage import S3Uploader


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Provides a single place where services are instantiated from config.
    Services are built on first access, so endpoints that never touch the
    LLM work without an API key configured. DB access is not held here;
    sessions are obtained per request or via db_session_scope().
    """
    config: AppConfig

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        return cls(config=config)

    @cached_property
    def ai_service(self) -> OpenAIService:
        return self._build_ai_service(self.config.llm)

    @cached_property
    def uploader(self) -> S3Uploader:
        return S3Uploader.from_config(self.config.storage)

    @cached_property
    def incentive_calculator(self) -> IncentiveCalculator:
        return IncentiveCalculator(self.config.retirement)

    @cached_property
    def advisor_calendar(self) -> AdvisorCalendar:
        return AdvisorCalendar(self.config.retirement)

    @cached_property
    def resume_parser(self) -> ResumeParser:
        return ResumeParser()

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'model': llm_config.model,
            'temperature': llm_config.temperature,
            'analysis_temperature': llm_config.analysis_temperature,
            'max_tokens': llm_config.max_tokens,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
            timeout=llm_config.request_timeout_seconds,
        )
