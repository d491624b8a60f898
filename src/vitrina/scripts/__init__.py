"""Scripts ejecutables (python -m vitrina.scripts.<nombre>)."""
