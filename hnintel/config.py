from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    hn_api_base: str = "https://hacker-news.firebaseio.com/v0"
    hn_web_base: str = "https://news.ycombinator.com"
    request_timeout: float = 30

    agent_name: str = "hn-intel"
    agent_version: str = "1.0.0"
    agent_description: str = (
        "Hacker News Intelligence - Real-time tech news, trending stories, "
        "and community insights from HN"
    )

    # Published in the entrypoint manifest; settlement happens elsewhere.
    payments_pay_to: str = ""
    payments_network: str = "base"
    payments_currency: str = "USDC"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
