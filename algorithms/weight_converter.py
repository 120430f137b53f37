class WeightConverter:
    """Utility for converting between kg and lb."""

    KG_TO_LB = 2.20462

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return kg * WeightConverter.KG_TO_LB

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return lb / WeightConverter.KG_TO_LB

    @staticmethod
    def format_lb(kg: float | None, empty: str | None = None) -> str:
        """Render ``kg`` as pounds with one decimal place.

        When ``empty`` is given it is returned for missing or non-positive
        weights instead of ``"0.0"``.
        """
        value = kg or 0.0
        if empty is not None and value <= 0:
            return empty
        return f"{WeightConverter.kg_to_lb(value):.1f}"
