"""
Encrypted Submission Manifest

Builds the XML document that replaces the submission body:

    <data xmlns="http://opendatakit.org/submissions" encrypted="yes" id=".." version="..">
      <base64EncryptedKey>..</base64EncryptedKey>
      <meta xmlns="http://openrosa.org/xforms"><instanceID>..</instanceID></meta>
      <media><file type="file">image.jpg.enc</file></media>
      <encryptedXmlFile type="file">submission.xml.enc</encryptedXmlFile>
      <base64EncryptedElementSignature>..</base64EncryptedElementSignature>
    </data>

Serialized without whitespace between elements. Children appear in the
order they were added.
"""

from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from formcrypt.common.models import RecordFile

ODK_SUBMISSION_NS = 'http://opendatakit.org/submissions'
OPENROSA_XFORMS_NS = 'http://openrosa.org/xforms'

_ATTR_ENTITIES = {'"': '&quot;', '\t': '&#9;', '\n': '&#10;', '\r': '&#13;'}


class Node:
    """An element with attributes and either text or child nodes."""

    def __init__(
        self,
        namespace: str,
        tag: str,
        text: str = '',
        attributes: Sequence[Tuple[str, str]] = (),
    ):
        self.namespace = namespace
        self.tag = tag
        self.text = text
        self.attributes = list(attributes)
        self.children: List["Node"] = []

    def append(self, child: "Node") -> "Node":
        self.children.append(child)
        return child

    def serialize(self, parent_namespace: Optional[str] = None) -> str:
        parts = [f'<{self.tag}']
        if self.namespace != parent_namespace:
            parts.append(f' xmlns="{escape(self.namespace, _ATTR_ENTITIES)}"')
        for name, value in self.attributes:
            parts.append(f' {name}="{escape(value, _ATTR_ENTITIES)}"')

        if not self.children and not self.text:
            parts.append('/>')
            return ''.join(parts)

        parts.append('>')
        parts.append(escape(self.text))
        for child in self.children:
            parts.append(child.serialize(self.namespace))
        parts.append(f'</{self.tag}>')
        return ''.join(parts)


class Manifest:
    """
    Append-only builder for the encrypted submission manifest.
    """

    def __init__(
        self,
        form_id: str,
        version: Optional[str] = None,
        client_tag: Optional[str] = None,
    ):
        """
        Create the root element.

        Args:
            form_id: Form identifier
            version: Form version, omitted when empty
            client_tag: Optional '_client' attribute value
        """
        attributes = []
        if client_tag:
            attributes.append(('_client', client_tag))
        attributes.append(('encrypted', 'yes'))
        attributes.append(('id', form_id))
        if version:
            attributes.append(('version', version))

        self._root = Node(ODK_SUBMISSION_NS, 'data', attributes=attributes)
        self._meta: Optional[Node] = None

    def add_element(self, name: str, content: str) -> None:
        """Append a text element in the submission namespace."""
        self._root.append(Node(ODK_SUBMISSION_NS, name, content))

    def add_meta_element(self, name: str, content: str) -> None:
        """
        Append a child to the shared <meta> element.

        The <meta> container is created on first use; later calls add
        further children to it.
        """
        if self._meta is None:
            self._meta = self._root.append(Node(OPENROSA_XFORMS_NS, 'meta'))
        self._meta.append(Node(OPENROSA_XFORMS_NS, name, content))

    def add_media_files(self, blobs: Sequence[RecordFile]) -> List[RecordFile]:
        """
        Append one <media><file type="file"> entry per blob, in order.

        Returns:
            The blobs, unchanged
        """
        for blob in blobs:
            media = self._root.append(Node(ODK_SUBMISSION_NS, 'media'))
            media.append(Node(ODK_SUBMISSION_NS, 'file', blob.name, [('type', 'file')]))
        return list(blobs)

    def add_xml_submission_file(self, blob: RecordFile) -> None:
        """Append the <encryptedXmlFile> reference."""
        self._root.append(
            Node(ODK_SUBMISSION_NS, 'encryptedXmlFile', blob.name, [('type', 'file')])
        )

    def to_xml(self) -> str:
        """Serialize the manifest."""
        return self._root.serialize()
