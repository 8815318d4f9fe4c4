from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	CNB_BASE_URL: str = 'https://api.cnb.cz/cnbapi'
	REQUEST_TIMEOUT: int = Field(default=10, gt=0)
	FETCH_MAX_ATTEMPTS: int = Field(default=3, ge=1)

	CACHE_TTL_SECONDS: int = Field(default=300, gt=0)

	# Application
	APP_NAME: str = 'Exchange Rate Updater'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@property
	def cache_ttl(self) -> timedelta:
		return timedelta(seconds=self.CACHE_TTL_SECONDS)


@lru_cache
def get_settings() -> Settings:
	return Settings()
