from typing import Optional

from pydantic import BaseModel


class UploadedImage(BaseModel):
    id: str
    url: str
    filename: str
    size: int
    uploadedAt: str
    uploadedBy: str
    width: Optional[int] = None
    height: Optional[int] = None
    publicId: Optional[str] = None
