from .generation import GenerationNodes, NO_PROVIDERS_MESSAGE

__all__ = [
    "GenerationNodes",
    "NO_PROVIDERS_MESSAGE",
]
