"""
Infrastructure layer - external service integrations.

- storage: Object storage (R2/S3) via boto3, plus signed URL issuance

These wrappers translate between boto3 and our upload domain models.
"""
