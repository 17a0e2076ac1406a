"""
Record and key material models using Pydantic.

A Record is what the calling application hands over for encryption and
what it gets back: the XML body replaced by the manifest, the files
replaced by the encrypted blobs.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FormKeyMaterial(BaseModel):
    """Form identity and the public key submissions are encrypted for."""
    model_config = ConfigDict(frozen=True)

    form_id: str = Field(..., description="Form identifier (manifest 'id' attribute)")
    version: Optional[str] = Field(None, description="Form version, omitted when empty")
    encryption_key: str = Field(
        ...,
        description="RSA public key, PEM or the bare base64 SubjectPublicKeyInfo body",
    )


class RecordFile(BaseModel):
    """A named file attached to a record."""
    name: str
    content: bytes


class EncryptedBlob(RecordFile):
    """An encrypted file with the MD5 of its plaintext."""
    md5: str = Field(..., description="Lowercase hex MD5 of the plaintext")

    @property
    def plain_name(self) -> str:
        """Name without the '.enc' suffix, as used in the element signature."""
        return self.name[:-4] if self.name.endswith('.enc') else self.name


class Record(BaseModel):
    """A submission: one XML document plus ordered media files."""
    instance_id: str = Field(..., description="Unique submission identifier, e.g. 'uuid:...'")
    xml: str = Field(..., description="Submission XML, or the manifest once encrypted")
    files: List[RecordFile] = Field(default_factory=list)
