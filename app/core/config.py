from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    environment: str = "development"

    # LLM provider: "openai", "vllm" or "gemini"
    llm_provider: str = "openai"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 2000

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_timeout: float = 120.0

    # vLLM / OpenAI-compatible endpoint
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 120.0

    # GitHub OAuth app
    github_client_id: str = ""
    github_client_secret: str = ""
    github_oauth_scope: str = "read:user user:email repo"
    github_oauth_redirect_uri: str = ""

    # GitHub API
    github_timeout: float = 30.0
    github_max_concurrent_requests: int = 5
    github_repos_per_page: int = 100

    # Prompt input limits
    readme_max_length_github: int = 2000
    readme_max_length_prompt: int = 1500
    resume_text_max_length: int = 15000
    readme_fetch_max_repos: int = 5

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_allowed_origins: str = ""

    # Rate limits
    rate_limit_default: str = "120/minute"
    rate_limit_generate: str = "10/minute"
    rate_limit_analyze: str = "10/minute"

    # Langfuse
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def missing_provider_settings(self) -> list[str]:
        """Return the env names the selected LLM provider still needs"""
        provider = self.llm_provider.lower()
        missing = []
        if provider == "openai" and not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        elif provider == "vllm" and not self.vllm_api_url:
            missing.append("VLLM_API_URL")
        elif provider == "gemini" and not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        return missing

    def validate_for_production(self) -> list[str]:
        """Check mandatory production settings and return the missing ones"""
        errors = self.missing_provider_settings()
        if not self.github_client_id:
            errors.append("GITHUB_CLIENT_ID")
        if not self.github_client_secret:
            errors.append("GITHUB_CLIENT_SECRET")
        return errors

    @model_validator(mode="after")
    def validate_provider_name(self):
        """Reject unknown LLM providers early"""
        if self.llm_provider.lower() not in {"openai", "vllm", "gemini"}:
            raise ValueError(f"Unsupported LLM provider: {self.llm_provider}")
        return self


settings = Settings()
