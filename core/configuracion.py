# core/configuracion.py
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import requests
import yaml

from electrical.energia.nrel import DEFAULT_TIMEOUT_S, NRELClient
from geometria.layout import LayoutConfig

from .costos import CostParameters
from .finanzas_lp import FinancialAssumptions

CONFIG_DIR = Path(__file__).resolve().parent / "config"


def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config inválida (debe ser dict): {path}")
    return data


@dataclass(frozen=True)
class DesignConfig:
    technical: Dict[str, Any]
    financial: Dict[str, Any]

    def section(self, name: str) -> Dict[str, Any]:
        sec = self.technical.get(name) or {}
        if not isinstance(sec, dict):
            raise ValueError(f"Sección técnica '{name}' debe ser dict.")
        return dict(sec)


def load_configuration(config_dir: Optional[Path] = None) -> DesignConfig:
    base = Path(config_dir) if config_dir else CONFIG_DIR
    technical = _leer_yaml(base / "technical.yaml")
    financial = _leer_yaml(base / "financial.yaml")
    return DesignConfig(technical=technical, financial=financial)


def _merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    # un nivel de anidación: secciones dict se fusionan, el resto se reemplaza
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = {**out[k], **v}
        else:
            out[k] = v
    return out


def effective_configuration(base: DesignConfig, overrides: Optional[dict]) -> DesignConfig:
    if not overrides:
        return base
    tec = _merge(base.technical, overrides.get("technical") or {})
    fin = _merge(base.financial, overrides.get("financial") or {})
    return DesignConfig(technical=tec, financial=fin)


# ==========================================================
# Objetos tipados
# ==========================================================

def _build(cls, data: Dict[str, Any], ctx: str):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{ctx}: claves desconocidas {unknown}")
    return cls(**data)


def layout_config_from(cfg: DesignConfig) -> LayoutConfig:
    return _build(LayoutConfig, cfg.section("layout"), "layout")


def cost_parameters_from(cfg: DesignConfig) -> CostParameters:
    return _build(CostParameters, cfg.section("costs"), "costs")


def financial_assumptions_from(cfg: DesignConfig) -> FinancialAssumptions:
    return _build(FinancialAssumptions, dict(cfg.financial), "financial")


def production_client_from(
    cfg: DesignConfig,
    api_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> NRELClient:
    """Cliente NREL con el timeout de la sección production; sin api_key, usa NREL_API_KEY."""
    timeout = float(cfg.section("production").get("timeout_s", DEFAULT_TIMEOUT_S))
    if api_key is None:
        return NRELClient.from_env(timeout=timeout, session=session)
    return NRELClient(api_key, timeout=timeout, session=session)
