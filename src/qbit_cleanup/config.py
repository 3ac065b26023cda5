#!/usr/bin/env python3
"""Configuration management for qBittorrent ratio cleanup."""

import os
from argparse import Namespace
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .constants import (
    DEFAULT_AGE_DAYS, DEFAULT_ENDPOINT, DEFAULT_PASSWORD, DEFAULT_RATIO,
    DEFAULT_TIMEOUT, DEFAULT_USERNAME
)
from .errors import ConfigError
from .models import RetentionPolicy
from .utils import parse_bool, parse_float, parse_int


@dataclass
class ConnectionConfig:
    """qBittorrent Web UI connection configuration."""
    endpoint: str = field(default_factory=lambda: os.environ.get("QB_ENDPOINT", DEFAULT_ENDPOINT))
    username: str = field(default_factory=lambda: os.environ.get("QB_USERNAME", DEFAULT_USERNAME))
    password: str = field(default_factory=lambda: os.environ.get("QB_PASSWORD", DEFAULT_PASSWORD))
    verify_ssl: bool = field(default_factory=lambda: parse_bool("QB_VERIFY_SSL", False))
    timeout: int = field(default_factory=lambda: parse_int("QB_TIMEOUT", DEFAULT_TIMEOUT, 1))

    def validate(self) -> None:
        """
        Check that the endpoint is an absolute http(s) URL.

        Raises:
            ConfigError: If the endpoint cannot be used
        """
        parts = urlsplit(self.endpoint.strip())
        if parts.scheme not in ("http", "https"):
            raise ConfigError(f"endpoint '{self.endpoint}' must use http or https")
        if not parts.hostname:
            raise ConfigError(f"endpoint '{self.endpoint}' has no host")
        try:
            parts.port
        except ValueError as e:
            raise ConfigError(f"endpoint '{self.endpoint}' has an invalid port: {e}") from e


@dataclass
class PolicyConfig:
    """Retention thresholds and behavior."""
    age_days: int = field(default_factory=lambda: parse_int("AGE_DAYS", DEFAULT_AGE_DAYS))
    ratio: float = field(default_factory=lambda: parse_float("RATIO", DEFAULT_RATIO))
    dry_run: bool = field(default_factory=lambda: parse_bool("DRY_RUN", False))
    delete_files: bool = field(default_factory=lambda: parse_bool("DELETE_FILES", True))


@dataclass
class Config:
    """Main configuration container."""
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    debug: bool = field(default_factory=lambda: parse_bool("DEBUG", False))

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls()

    @classmethod
    def from_args(cls, args: Namespace) -> "Config":
        """
        Create configuration from parsed command line arguments.

        Options left unset on the command line keep their environment
        (or built-in) value.

        Args:
            args: Namespace produced by the CLI parser

        Returns:
            Merged configuration
        """
        config = cls.from_environment()
        conn = config.connection
        policy = config.policy

        if args.endpoint is not None:
            conn.endpoint = args.endpoint
        if args.username is not None:
            conn.username = args.username
        if args.password is not None:
            conn.password = args.password
        if args.verify_ssl:
            conn.verify_ssl = True

        if args.age is not None:
            policy.age_days = args.age
        if args.ratio is not None:
            policy.ratio = args.ratio
        if args.dry_run:
            policy.dry_run = True
        if args.keep_files:
            policy.delete_files = False

        if args.debug:
            config.debug = True
        return config

    def validate(self) -> None:
        """Validate the configuration before connecting."""
        self.connection.validate()
        self.to_policy()

    def to_policy(self) -> RetentionPolicy:
        """Build the immutable policy used for a run."""
        return RetentionPolicy(
            age_threshold_days=self.policy.age_days,
            ratio_threshold=self.policy.ratio,
            simulate=self.policy.dry_run,
            delete_files=self.policy.delete_files,
        )
