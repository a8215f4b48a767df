"""Presale service: the four facets of the state machine over one context."""
from presale.services.context import PresaleContext
from presale.services.registry import RoundRegistry
from presale.services.pricing import PricingEngine
from presale.services.purchases import PurchaseAccounting
from presale.services.claims import ClaimEngine


class PresaleService:
    """Round registry, pricing, purchases and claims sharing one session and clock."""

    def __init__(self, ctx: PresaleContext):
        self.ctx = ctx
        self.registry = RoundRegistry(ctx)
        self.pricing = PricingEngine(ctx)
        self.purchases = PurchaseAccounting(ctx, self.pricing)
        self.claims = ClaimEngine(ctx)

    @property
    def events(self):
        return self.ctx.events
