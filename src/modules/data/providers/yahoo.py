"""Yahoo Finance Market Data Provider.

Daily bars via the yfinance library (unofficial scraper).
"""

from datetime import date

import pandas as pd
import yfinance as yf

from src.modules.data.protocols import ProviderError
from src.modules.features.bars import OHLCV_COLUMNS
from src.shared.logger import get_logger

logger = get_logger(__name__)


class YahooProvider:
    """Yahoo Finance market data provider.

    Uses yfinance, which scrapes Yahoo Finance.
    Be aware: may be rate-limited or blocked with heavy usage.
    """

    @property
    def name(self) -> str:
        """Provider name."""
        return "Yahoo"

    def get_daily_candles(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """Fetch daily OHLCV candles from Yahoo Finance.

        Args:
            ticker: Stock symbol (e.g., 'AAPL').
            start_date: Start date (inclusive).
            end_date: End date (inclusive).

        Returns:
            Normalized DataFrame with OHLCV columns, oldest first.

        Raises:
            ProviderError: If Yahoo Finance fails or returns nothing.
        """
        logger.info(
            f"Fetching {ticker} from Yahoo Finance",
            extra={"ticker": ticker, "start": str(start_date), "end": str(end_date)},
        )

        try:
            # yfinance end_date is exclusive, so add 1 day
            end_date_exclusive = pd.Timestamp(end_date) + pd.Timedelta(days=1)

            stock = yf.Ticker(ticker)
            df = stock.history(
                start=start_date.isoformat(),
                end=end_date_exclusive.strftime("%Y-%m-%d"),
                interval="1d",
            )

            if df.empty:
                raise ProviderError(self.name, ticker, "No data returned")

            return self._normalize(df)

        except Exception as e:
            if isinstance(e, ProviderError):
                raise
            raise ProviderError(self.name, ticker, str(e)) from e

    def _normalize(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize yfinance response to the OHLCV schema.

        Args:
            df: Raw yfinance DataFrame.

        Returns:
            DataFrame indexed by date with open/high/low/close/volume.
        """
        df = df.rename(columns={column.title(): column for column in OHLCV_COLUMNS})

        missing = set(OHLCV_COLUMNS) - set(df.columns)
        if missing:
            raise ValueError(f"Response is missing columns: {sorted(missing)}")

        df.index = df.index.date
        df.index.name = "date"

        # Rows with a missing price cannot be rated
        return df[list(OHLCV_COLUMNS)].dropna().astype(float).sort_index()
