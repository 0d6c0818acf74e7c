from sensai.util import logging

from razorsnap.constants import RAZORSNAP_FILE_ENCODING
from razorsnap.model import ProjectConfigurationSnapshot
from razorsnap.serialization import SERIALIZATION_FORMAT_VERSION, deserialize_snapshot, serialize_snapshot

log = logging.getLogger(__name__)


class SnapshotWriter:
    """
    Persists configuration snapshots, replacing any previous document at the same path.

    Writing is best-effort: serialization and I/O errors (missing directory, permissions, full disk, ...) are logged
    and discarded, so a single project can never take down the listener. The document for that project
    then remains stale or absent until the next build event succeeds.
    """

    def write(self, path: str, snapshot: ProjectConfigurationSnapshot) -> bool:
        """
        :param path: the path of the document
        :param snapshot: the snapshot to persist
        :return: whether the document was written
        """
        try:
            # encoded up front, so that an unencodable snapshot leaves any previous document untouched
            data = serialize_snapshot(snapshot).encode(RAZORSNAP_FILE_ENCODING)
        except (ValueError, TypeError) as e:
            log.warning("Could not serialize Razor project configuration for %s: %s", path, e)
            return False
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            # TODO: retry writes which failed due to transient conditions (e.g. file locked by the language server)
            log.warning("Could not write Razor project configuration to %s: %s", path, e)
            return False
        log.debug("Wrote Razor project configuration (format version %d) to %s", SERIALIZATION_FORMAT_VERSION, path)
        return True


def read_snapshot(path: str) -> ProjectConfigurationSnapshot | None:
    """
    Reads a configuration document as written by :class:`SnapshotWriter`.

    Since writes are not atomic and may fail silently, a missing, partially written or otherwise invalid
    document means that no configuration is known (yet) rather than an error.

    :param path: the path of the document
    :return: the snapshot or None if no valid document exists at the given path
    """
    try:
        with open(path, encoding=RAZORSNAP_FILE_ENCODING) as f:
            document = f.read()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("No Razor project configuration readable at %s: %s", path, e)
        return None
    try:
        return deserialize_snapshot(document)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        log.debug("Ignoring invalid Razor project configuration at %s: %s", path, e)
        return None
