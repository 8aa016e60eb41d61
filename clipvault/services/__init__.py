from .s3 import S3Service
from .uploads import UploadService, build_object_key, clip_key_prefix
