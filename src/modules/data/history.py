"""Price History — fetches the daily bars a rating run needs.

Bridges a MarketDataProvider and the indicator library: fetches a
trailing window of daily candles and returns validated PriceBars.
"""

from datetime import date, timedelta

from src.modules.data.protocols import MarketDataProvider, ProviderError
from src.modules.features.bars import PriceBars
from src.shared.logger import get_logger

logger = get_logger(__name__)


class PriceHistory:
    """Loads PriceBars for a ticker from a market data provider.

    Usage:
        history = PriceHistory(YahooProvider())
        bars = history.load("AAPL", lookback_days=300)
    """

    def __init__(self, provider: MarketDataProvider) -> None:
        """Initialize PriceHistory.

        Args:
            provider: Source of daily OHLCV candles.
        """
        self._provider = provider

    def load(
        self,
        ticker: str,
        lookback_days: int,
        end_date: date | None = None,
    ) -> PriceBars:
        """Fetch a trailing window of daily bars.

        Args:
            ticker: Stock symbol (e.g., 'AAPL').
            lookback_days: Calendar days to fetch, ending at end_date.
            end_date: Last day to include (defaults to yesterday, so a
                partially traded session is never rated).

        Returns:
            PriceBars ordered oldest first, indexed by date.

        Raises:
            ProviderError: If the provider fails or returns no rows.
        """
        end = end_date or date.today() - timedelta(days=1)
        start = end - timedelta(days=lookback_days)

        df = self._provider.get_daily_candles(ticker, start, end)
        if df.empty:
            raise ProviderError(self._provider.name, ticker, "No rows in requested window")

        logger.info(
            f"Loaded {len(df)} bars for {ticker}",
            extra={"ticker": ticker, "start": str(start), "end": str(end)},
        )
        return PriceBars.from_frame(df)
