from .sessions import (
    SessionStore,
)

from .tags import (
    TagCatalog,
    CALLBACK_DATA_LIMIT,
)

from .retractions import (
    RetractionRegistry,
)
