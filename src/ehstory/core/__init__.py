"""
Core package for ehstory contracts (constants, errors, observation schema).

## Contracts (single source of truth)
- Constants — indicator names, income tiers and their fixed colors, scene numbering.
- Schema — the pydantic Observation model and its column descriptor.
- Errors — typed exceptions shared by io and story.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Field names are lower_snake and match the keys of the source JSON records.

## Examples
```python
from ehstory.core.schema import Observation
Observation(country_name="South Africa", country_code="ZAF", year=2021,
            income_group="Upper middle income", hiv_incidence_rate=7.7)
```
"""
