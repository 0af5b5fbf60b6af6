from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Name of the no-argument method the experimentation provider exposes
    experiment_query_method: str = "get_running_ab_experiments"

    # Optional YAML file with pinned experiments (static provider)
    experiments_path: str = ""

    log_level: str = "INFO"


settings = Settings()
