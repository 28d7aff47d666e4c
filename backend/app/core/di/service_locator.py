from typing import Optional

from app.core.config.environment_config import EnvironmentConfig
from app.core.utils.logger import get_logger, set_level
from app.data.adapters.google_places_client import GooglePlacesClient
from app.data.adapters.location_directory import LocationDirectory
from app.data.repositories.places_repository_impl import PlacesRepositoryImpl
from app.domain.usecases.estimate_repair_cost_usecase import EstimateRepairCostUseCase
from app.domain.usecases.rank_repair_shops_usecase import RankRepairShopsUseCase
from app.domain.usecases.resolve_location_usecase import ResolveLocationUseCase

_logger = get_logger("service_locator")


class ServiceLocator:
    _config: Optional[EnvironmentConfig] = None
    _places_client: Optional[GooglePlacesClient] = None
    _places_repo: Optional[PlacesRepositoryImpl] = None
    _location_directory: Optional[LocationDirectory] = None
    _estimate_usecase: Optional[EstimateRepairCostUseCase] = None
    _resolve_location_usecase: Optional[ResolveLocationUseCase] = None
    _rank_shops_usecase: Optional[RankRepairShopsUseCase] = None

    @classmethod
    def config(cls) -> EnvironmentConfig:
        if cls._config is None:
            cls._config = EnvironmentConfig()
            set_level(cls._config.log_level)
            _logger.info(
                "[config] APP_ENV=%s GOOGLE_API_KEY=%s LOCATION_MATCH_STRATEGY=%s PLACES_TIMEOUT_SECONDS=%s",
                cls._config.app_env,
                "SET" if bool(cls._config.google_api_key) else "MISSING",
                cls._config.location_match_strategy,
                cls._config.places_timeout_seconds,
            )
        return cls._config

    @classmethod
    def places_client(cls) -> GooglePlacesClient:
        if cls._places_client is None:
            cfg = cls.config()
            cls._places_client = GooglePlacesClient(
                api_key=cfg.google_api_key,
                base_url=cfg.google_places_api_base,
                timeout=cfg.places_timeout_seconds,
            )
        return cls._places_client

    @classmethod
    def places_repo(cls) -> PlacesRepositoryImpl:
        if cls._places_repo is None:
            cfg = cls.config()
            cls._places_repo = PlacesRepositoryImpl(
                client=cls.places_client(),
                search_radius_meters=cfg.places_search_radius_meters,
            )
        return cls._places_repo

    @classmethod
    def location_directory(cls) -> LocationDirectory:
        if cls._location_directory is None:
            cls._location_directory = LocationDirectory(strategy=cls.config().location_match_strategy)
        return cls._location_directory

    @classmethod
    def estimate_usecase(cls) -> EstimateRepairCostUseCase:
        if cls._estimate_usecase is None:
            cls._estimate_usecase = EstimateRepairCostUseCase()
        return cls._estimate_usecase

    @classmethod
    def resolve_location_usecase(cls) -> ResolveLocationUseCase:
        if cls._resolve_location_usecase is None:
            cls._resolve_location_usecase = ResolveLocationUseCase(
                directory=cls.location_directory(),
                repository=cls.places_repo(),
            )
        return cls._resolve_location_usecase

    @classmethod
    def rank_shops_usecase(cls) -> RankRepairShopsUseCase:
        if cls._rank_shops_usecase is None:
            cls._rank_shops_usecase = RankRepairShopsUseCase(
                repository=cls.places_repo(),
                details_workers=cls.config().places_details_workers,
            )
        return cls._rank_shops_usecase

    @classmethod
    def reset(cls) -> None:
        """Drop every cached instance; the next accessor call rebuilds it."""
        cls._config = None
        cls._places_client = None
        cls._places_repo = None
        cls._location_directory = None
        cls._estimate_usecase = None
        cls._resolve_location_usecase = None
        cls._rank_shops_usecase = None
