"""
classextension: Composable, versioned class extensions applied by subclassing.

## Example

```python
from classextension import Extensible, Extension

class Model(Extensible):
    pass

def add_timestamps(cls: type) -> type:
    class Timestamped(cls):
        created_at = None
    return Timestamped

timestamps = Extension(name="timestamps", version="1.0.0", extend=add_timestamps)

TimestampedModel = Model.extend(timestamps)
TimestampedModel.extend(timestamps) is TimestampedModel  # True
Model.extend(timestamps) is TimestampedModel  # True
```

Extensions listed in ``extends`` are applied first, so a dependency shared by
several extensions is applied once. Extensions with the same ``name`` are
reconciled by ``version``: an exact match, or a match against the range given
via ``version=`` or ``dependencies``, is a no-op; anything else raises
:class:`VersionConflictError`.
"""

from classextension._extend import extend as extend
from classextension._extension import Extension as Extension
from classextension._methods import Extensible as Extensible
from classextension._methods import add_methods_to_class as add_methods_to_class
from classextension._methods import get_extensions as get_extensions
from classextension._methods import instance_get_extensions as instance_get_extensions
from classextension._methods import (
    instance_is_directly_extended as instance_is_directly_extended,
)
from classextension._methods import (
    instance_is_extended_with as instance_is_extended_with,
)
from classextension._methods import is_directly_extended as is_directly_extended
from classextension._methods import is_extended_with as is_extended_with
from classextension.config import ExtendOptions as ExtendOptions
from classextension.errors import ExtensionContractError as ExtensionContractError
from classextension.errors import ExtensionError as ExtensionError
from classextension.errors import InvalidExtensionError as InvalidExtensionError
from classextension.errors import VersionConflictError as VersionConflictError
from classextension.errors import VersionMismatchError as VersionMismatchError
from classextension.errors import VersionRangeError as VersionRangeError
