from __future__ import annotations

from decimal import Decimal

from jeton.domain.equity.entities import SharesConfig, SharesConfigPatch
from jeton.domain.equity.errors import ConflictError, ValidationError
from jeton.domain.equity.repository import SharesConfigRepository, ShareholdingRepository
from jeton.domain.equity.shares import PRICE_QUANTUM, ownership_percentage
from jeton.infrastructure.unit_of_work import DuckDBUnitOfWork

from ..dtos.shares_dto import SharesConfigDTO, SharesOverviewDTO, ValuationDTO
from .valuation_bridge import ValuationBridge

DEFAULT_DESCRIPTION = "Default company shares configuration"


class SharesService:
    """Single-row share configuration: lazy creation, guarded updates, overview."""

    def __init__(
        self,
        config_repo: SharesConfigRepository,
        holding_repo: ShareholdingRepository,
        bridge: ValuationBridge,
        uow: DuckDBUnitOfWork,
        default_authorized_shares: int = 1_000_000,
        default_par_value: Decimal = Decimal("1.00"),
    ) -> None:
        self._config_repo = config_repo
        self._holding_repo = holding_repo
        self._bridge = bridge
        self._uow = uow
        self._default_authorized = default_authorized_shares
        self._default_par_value = default_par_value

    def get_configuration(self) -> SharesConfig:
        config = self._config_repo.get()
        if config is None:
            config = self._config_repo.create(
                self._default_authorized, self._default_par_value, DEFAULT_DESCRIPTION
            )
        return config

    def update_authorized_shares(self, new_value: int) -> int:
        """Returns the remaining capacity (authorized - issued) after the update."""
        config = self.update(SharesConfigPatch(authorized_shares=new_value))
        return config.unissued_shares

    def update(self, patch: SharesConfigPatch) -> SharesConfig:
        if patch.is_empty():
            raise ValidationError("No fields to update")
        if patch.par_value is not None and patch.par_value < Decimal("0"):
            raise ValidationError("Par value cannot be negative")
        if patch.class_type is not None and not patch.class_type.strip():
            raise ValidationError("Class type cannot be empty")

        config = self.get_configuration()
        if patch.authorized_shares is not None:
            self._check_authorized(patch.authorized_shares, config)

        with self._uow:
            return self._config_repo.update(patch)

    def describe(self) -> SharesConfigDTO:
        config = self.get_configuration()
        allocated = self._holding_repo.total_allocated()
        return SharesConfigDTO.from_domain(config, allocated)

    def overview(self) -> SharesOverviewDTO:
        config = self.get_configuration()
        allocated = self._holding_repo.total_allocated()
        summary = self._bridge.compute_strategic_value()
        price = self._bridge.price_per_share(config.authorized_shares)
        return SharesOverviewDTO(
            id=config.id,
            authorized_shares=config.authorized_shares,
            issued_shares=config.issued_shares,
            class_type=config.class_type,
            status=config.status,
            par_value=str(config.par_value),
            created_at=config.created_at.isoformat() if config.created_at else None,
            updated_at=config.updated_at.isoformat() if config.updated_at else None,
            valuation=ValuationDTO.from_domain(summary),
            shares_allocated=allocated,
            shares_remaining=max(0, config.authorized_shares - allocated),
            price_per_share=str(price.quantize(PRICE_QUANTUM)),
            allocation_percentage=str(ownership_percentage(allocated, config.authorized_shares)),
        )

    def _check_authorized(self, new_value: int, config: SharesConfig) -> None:
        if new_value <= 0:
            raise ValidationError("Authorized shares must be greater than 0")
        allocated = self._holding_repo.total_allocated()
        if new_value < allocated:
            raise ConflictError(
                f"Cannot reduce authorized shares below {allocated} already allocated shares"
            )
        if new_value < config.issued_shares:
            raise ConflictError(
                f"Cannot reduce authorized shares below issued shares ({config.issued_shares})"
            )
