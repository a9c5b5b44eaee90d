"""
Option sets for the ART modules.

Options are validated once, when they are built, and are frozen afterwards:
the threshold and the prototype dimension of a module depend on them, so they
cannot change once training has started. Building an option model directly
raises ``pydantic.ValidationError`` for out-of-range values; modules built from
keyword options report the same problem as a ``ConfigurationError``.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError


class ActivationRule(str, Enum):
    BASIC = "basic"
    GAMMA = "gamma"
    CHOICE_BY_DIFFERENCE = "choice_by_difference"


class MatchRule(str, Enum):
    BASIC = "basic"
    UNNORMALIZED = "unnormalized"
    GAMMA = "gamma"


class Linkage(str, Enum):
    """Reduction of a nested module's per-prototype values into one value."""

    SINGLE = "single"
    COMPLETE = "complete"
    AVERAGE = "average"
    MEDIAN = "median"
    WEIGHTED = "weighted"
    CENTROID = "centroid"


def _force_gamma_rules(data):
    # Gamma normalization only makes sense with the gamma activation and match
    if isinstance(data, dict) and data.get("gamma_normalization"):
        data = dict(data)
        data["activation"] = ActivationRule.GAMMA
        data["match"] = MatchRule.GAMMA
    return data


class ARTOptions(BaseModel):
    """Fields shared by every module."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Choice parameter
    alpha: float = Field(1e-3, gt=0.0)
    # Learning rate, 1.0 is fast commit
    beta: float = Field(1.0, gt=0.0, le=1.0)
    # Match tracking increment
    epsilon: float = Field(1e-3, gt=0.0, lt=1.0)
    max_epoch: int = Field(1, ge=1)
    # Show progress bars during batch training and inference
    display: bool = False
    # New categories start from all-ones and learn the sample
    uncommitted: bool = False


class FuzzyARTOptions(ARTOptions):
    rho: float = Field(0.6, ge=0.0, le=1.0)
    gamma: float = Field(3.0, ge=1.0)
    gamma_ref: float = Field(1.0, ge=0.0)
    gamma_normalization: bool = False
    activation: ActivationRule = ActivationRule.BASIC
    match: MatchRule = MatchRule.BASIC

    @model_validator(mode="before")
    @classmethod
    def force_gamma_rules(cls, data):
        return _force_gamma_rules(data)

    @model_validator(mode="after")
    def check_gamma_ref(self):
        if self.gamma_ref > self.gamma:
            raise ValueError(
                f"gamma_ref ({self.gamma_ref}) must not exceed gamma ({self.gamma})"
            )
        return self


class DVFAOptions(ARTOptions):
    rho_lb: float = Field(0.55, ge=0.0, le=1.0)
    rho_ub: float = Field(0.75, ge=0.0, le=1.0)
    activation: ActivationRule = ActivationRule.BASIC
    match: MatchRule = MatchRule.UNNORMALIZED

    @model_validator(mode="after")
    def check_bounds(self):
        if self.rho_lb > self.rho_ub:
            raise ValueError(
                f"rho_lb ({self.rho_lb}) must not exceed rho_ub ({self.rho_ub})"
            )
        return self


class DDVFAOptions(ARTOptions):
    rho_lb: float = Field(0.7, ge=0.0, le=1.0)
    rho_ub: float = Field(0.85, ge=0.0, le=1.0)
    gamma: float = Field(3.0, ge=1.0)
    gamma_ref: float = Field(1.0, ge=0.0)
    gamma_normalization: bool = True
    linkage: Linkage = Linkage.SINGLE
    activation: ActivationRule = ActivationRule.GAMMA
    match: MatchRule = MatchRule.GAMMA

    @model_validator(mode="before")
    @classmethod
    def force_gamma_rules(cls, data):
        return _force_gamma_rules(data)

    @model_validator(mode="after")
    def check_bounds(self):
        if self.rho_lb > self.rho_ub:
            raise ValueError(
                f"rho_lb ({self.rho_lb}) must not exceed rho_ub ({self.rho_ub})"
            )
        if self.gamma_ref >= self.gamma:
            raise ValueError(
                f"gamma_ref ({self.gamma_ref}) must be less than gamma ({self.gamma})"
            )
        return self

    def nested_options(self):
        """Options used by every nested FuzzyART module."""
        return FuzzyARTOptions(
            rho=self.rho_ub,
            alpha=self.alpha,
            beta=self.beta,
            epsilon=self.epsilon,
            gamma=self.gamma,
            gamma_ref=self.gamma_ref,
            gamma_normalization=self.gamma_normalization,
            uncommitted=self.uncommitted,
            activation=self.activation,
            match=self.match,
        )


class SFAMOptions(ARTOptions):
    rho: float = Field(0.75, ge=0.0, le=1.0)
    alpha: float = Field(1e-7, gt=0.0)
    activation: ActivationRule = ActivationRule.BASIC
    match: MatchRule = MatchRule.BASIC


def build_options(options_cls, opts=None, **kwargs):
    """Return ``opts`` or an ``options_cls`` built from keyword arguments."""
    if opts is not None:
        if kwargs:
            raise TypeError("pass either an options object or keyword options, not both")
        if not isinstance(opts, options_cls):
            raise TypeError(
                f"expected {options_cls.__name__}, got {type(opts).__name__}"
            )
        return opts
    try:
        return options_cls(**kwargs)
    except ValidationError as err:
        raise ConfigurationError(f"invalid {options_cls.__name__}: {err}") from err
