from pydantic_settings import BaseSettings

from venue_scraper.schemas.scraper import DEFAULT_USER_AGENTS, ProxyConfig, ScraperConfig


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    log_level: str = "INFO"
    max_jobs: int = 1000

    scraper_max_retries: int = 3
    scraper_retry_delay_ms: int = 1000
    scraper_requests_per_second: float = 2.0
    scraper_max_concurrency: int = 2
    scraper_timeout_ms: int = 30_000
    scraper_dispatch_delay_ms: int = 0
    scraper_max_body_bytes: int = 5 * 1024 * 1024
    scraper_user_agents: list[str] = DEFAULT_USER_AGENTS
    scraper_proxy_host: str = ""
    scraper_proxy_port: int = 8080
    scraper_proxy_username: str = ""
    scraper_proxy_password: str = ""

    def scraper_config(self) -> ScraperConfig:
        proxy: ProxyConfig | None = None
        if self.scraper_proxy_host:
            proxy = ProxyConfig(
                host=self.scraper_proxy_host,
                port=self.scraper_proxy_port,
                username=self.scraper_proxy_username or None,
                password=self.scraper_proxy_password or None,
            )
        return ScraperConfig(
            max_retries=self.scraper_max_retries,
            retry_delay_ms=self.scraper_retry_delay_ms,
            requests_per_second=self.scraper_requests_per_second,
            max_concurrency=self.scraper_max_concurrency,
            timeout_ms=self.scraper_timeout_ms,
            dispatch_delay_ms=self.scraper_dispatch_delay_ms,
            max_body_bytes=self.scraper_max_body_bytes,
            user_agents=self.scraper_user_agents,
            proxy=proxy,
        )
