from __future__ import annotations
import pandas as pd
import numpy as np

from constants import FULL_CONTAINER_TYPES

def container_volume(df: pd.DataFrame) -> pd.Series:
    """Containers per record: fcl (or 1 when blank/zero) for full-container loads, else 0."""
    fcl = pd.to_numeric(df["fcl"], errors="coerce").fillna(0)
    full = df["shipment_type"].fillna("").astype(str).str.strip().str.upper().isin(FULL_CONTAINER_TYPES)
    return pd.Series(np.where(full, np.where(fcl > 0, fcl, 1), 0), index=df.index, dtype=float)
