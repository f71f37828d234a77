from typing import List

from fastapi import APIRouter, HTTPException

from ..pipeline.decision import InvalidAddress
from ..pipeline.simulate import SimulationHistory, history_out, simulate, simulate_batch
from ..schemas import BatchItemOut, BatchSimulateIn, HistoryItemOut, SimulateIn, SimulateOut

router = APIRouter()

# Process-local; cleared on restart.
history = SimulationHistory()


@router.post("", response_model=SimulateOut)
def simulate_address(payload: SimulateIn) -> SimulateOut:
    """
    Decide whether an address receives an automatic acknowledgement.

    Rules are applied in a fixed order:
    - inclusions (addresses, then domains) force the acknowledgement
    - exclusions (domains, then addresses, then patterns) block it
    - addresses in the organizational domain are blocked
    - any other address gets the acknowledgement

    Returns:
    - `allowed`: whether the acknowledgement is sent
    - `reason_code`: ForcedInclusion | Excluded | Internal | ExternalDefault
    - `matched_rule`: the rule that decided (null for the default)
    - `explanation`: HTML-escaped justification for display
    - `summary`: one-phrase summary

    Example request:
    ```json
    {
      "address": "noreply@acme.com",
      "config": {
        "internalDomain": "acme.com",
        "exclusion": {"patterns": ["noreply@*"]}
      }
    }
    ```
    """
    try:
        return simulate(payload.address, payload.config.to_rule_set(), history=history)
    except InvalidAddress as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/batch", response_model=List[BatchItemOut])
def simulate_addresses(payload: BatchSimulateIn) -> List[BatchItemOut]:
    """Simulate several addresses against one rule set; invalid entries carry an error."""
    return simulate_batch(payload.addresses, payload.config.to_rule_set())


@router.get("/history", response_model=List[HistoryItemOut])
def simulation_history() -> List[HistoryItemOut]:
    """Most recent simulations first."""
    return history_out(history)


@router.delete("/history", status_code=204)
def clear_history() -> None:
    history.clear()
