from typing import Protocol

from electrical.energia.contrato import ProductionRequest, ProductionResponse


class ProductionService(Protocol):
    def calculate_production(self, request: ProductionRequest) -> ProductionResponse: ...
