from auditfs.config.settings import AuditSettings, DiskConfig, FilesystemDriverConfig

__all__ = ["AuditSettings", "DiskConfig", "FilesystemDriverConfig"]
