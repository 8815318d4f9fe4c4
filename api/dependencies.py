import logging

from application.services import ExchangeRateProvider
from config.settings import get_settings

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	exchange_rate_provider: ExchangeRateProvider | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.exchange_rate_provider = ExchangeRateProvider.from_settings(settings)
	logger.info(f'Dependencies initialized (cache TTL {settings.CACHE_TTL_SECONDS}s)')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.exchange_rate_provider:
		await deps.exchange_rate_provider.close()
		deps.exchange_rate_provider = None

	logger.info('Cleanup complete')


def get_exchange_rate_provider() -> ExchangeRateProvider:
	if deps.exchange_rate_provider is None:
		raise RuntimeError('Exchange rate provider not initialized')
	return deps.exchange_rate_provider
