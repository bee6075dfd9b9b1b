from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        'extra': 'ignore',
        'env_file': '.env',
        'env_file_encoding': 'utf-8',
        'frozen': True,
    }

    API_HOST: str = '127.0.0.1'
    API_PORT: int = 8080
    API_RELOAD: bool = False

    SERVICE_NAME: str = 'metric-mock'
    SERVICE_VERSION: str = '0.1.0'
    LOG_LEVEL: str = 'INFO'
    LOG_FORMAT: str = 'text'


settings = Settings()
