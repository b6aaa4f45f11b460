"""Bill curve — forward tariff sampled over a usage grid.

Used to chart the tariff and to check that a tariff configuration keeps
the bill non-decreasing in usage, which the bill → usage estimator relies on.
"""

from __future__ import annotations

import logging

import numpy as np

from solar_quote.config.tariff import TariffConfig
from solar_quote.engine.tariff import calculate_bill
from solar_quote.models.results import BillCurve

logger = logging.getLogger(__name__)


def compute_bill_curve(
    afa_rate: float = 0.0,
    max_kwh: float = 2_000.0,
    step_kwh: float = 1.0,
    tariff: TariffConfig | None = None,
) -> BillCurve:
    """Sample ``total_bill`` on ``[0, max_kwh]`` every ``step_kwh``.

    The grid always includes ``max_kwh`` itself.
    """
    if max_kwh <= 0 or step_kwh <= 0:
        raise ValueError("max_kwh and step_kwh must be positive")

    n_points = int(np.floor(max_kwh / step_kwh)) + 1
    usage = np.arange(n_points, dtype=float) * step_kwh
    if usage[-1] < max_kwh:
        usage = np.append(usage, max_kwh)

    bills = np.array([calculate_bill(u, afa_rate, tariff).total_bill for u in usage])

    # Allow for float noise between neighbouring samples.
    drops = np.flatnonzero(np.diff(bills) < -1e-9)
    is_monotonic = drops.size == 0
    first_decrease = None if is_monotonic else float(usage[drops[0] + 1])
    if not is_monotonic:
        logger.warning(
            "Bill decreases with usage at %.2f kWh (AFA %.4f); usage estimates "
            "near this point are unreliable",
            first_decrease, afa_rate,
        )

    return BillCurve(
        afa_rate=afa_rate,
        usage_kwh=usage.tolist(),
        total_bill=bills.tolist(),
        is_monotonic=is_monotonic,
        first_decrease_kwh=first_decrease,
    )
