"""Names shared with the importer image and with other controllers.

These are persisted on cluster objects; changing any value breaks interoperability.
"""

from __future__ import annotations

from typing import Final

ANN_ENDPOINT: Final[str] = "kubevirt.io/storage.import.endpoint"
ANN_SECRET: Final[str] = "kubevirt.io/storage.import.secretName"
ANN_STATUS: Final[str] = "kubevirt.io/storage.import.status"
ANN_CREATED_BY: Final[str] = "kubevirt.io/storage.createdByController"

IMPORTER_PODNAME: Final[str] = "importer"
IMPORTER_DATA_DIR: Final[str] = "/data"
IMPORTER_IMAGE: Final[str] = "docker.io/jcoperh/importer"
IMPORTER_VOLUME_NAME: Final[str] = "data-path"

IMPORTER_ENDPOINT: Final[str] = "IMPORTER_ENDPOINT"
IMPORTER_ACCESS_KEY_ID: Final[str] = "IMPORTER_ACCESS_KEY_ID"
IMPORTER_SECRET_KEY: Final[str] = "IMPORTER_SECRET_KEY"

KEY_ACCESS: Final[str] = "accessKeyId"
KEY_SECRET: Final[str] = "secretKey"
