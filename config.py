from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    sqlalchemy_database_url: str = "sqlite:///./clinic.db"
    sql_echo: bool = False
    log_level: str = "INFO"
    # both off by default: the schema itself allows any status change and any supervisor chain
    enforce_status_transitions: bool = False
    prevent_supervision_cycles: bool = False
    supervision_max_depth: int = 64

    model_config = {
        "env_file": ".env",
        "extra": "forbid"
    }

settings = Settings()
