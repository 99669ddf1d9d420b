"""Generic model management framework for Pydantic models.

- ModelManagerService: stateful get/set/save for any Pydantic model
- PydanticPersistence: load/save Pydantic models to JSON with backups
- FileBlobStore / MemoryBlobStore: key-value stores behind the BlobStore protocol
- ModelEvent, ModelObserver, ObserverManager: the observer pattern

## Example Usage

```python
from pathlib import Path
from droneshow.model_manager import ModelManagerService
from droneshow.models import AppConfig

service = ModelManagerService[AppConfig](
    AppConfig, AppConfig(), default_path=Path("config.json")
)
service.set("flight.max_speed", 12)
service.save()
```
"""

from droneshow.model_manager.blob_store import FileBlobStore, MemoryBlobStore
from droneshow.model_manager.observer import ObserverManager
from droneshow.model_manager.persistence import PydanticPersistence
from droneshow.model_manager.protocols import BlobStore, ModelEvent, ModelObserver
from droneshow.model_manager.service import ModelManagerService

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "ModelEvent",
    "ModelManagerService",
    "ModelObserver",
    "ObserverManager",
    "PydanticPersistence",
]
