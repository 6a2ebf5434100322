"""physlab backend: half-Atwood and resonance-tube teaching simulations."""

__version__ = "0.3.0"
