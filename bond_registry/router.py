"""Dispatch of named invocations to the bond repository.

An invocation is an operation name plus a list of string arguments. The
name is resolved to an :class:`Operation`, the arguments are checked and
parsed into that operation's argument type, and only then is the store
touched. Mutating calls go through :meth:`Router.invoke`, read-only calls
through :meth:`Router.query`; ``ping`` is valid in both.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from bond_registry import bootstrap
from bond_registry.codec import encode_bond, encode_bond_list
from bond_registry.credentials import CredentialDirectory
from bond_registry.exceptions import (
    AlreadyExistsError,
    ArgumentError,
    BondNotFoundError,
    BondRegistryError,
    UnknownOperationError,
)
from bond_registry.models import Bond
from bond_registry.repository import BondRepository

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    CREATE_BOND = "create_bond"
    TRANSFER_BOND = "transfer_bond"
    PING = "ping"
    GET_BOND_DETAILS = "get_bond_details"
    CHECK_UNIQUE_REAL_ESTATE_ID = "check_unique_real_estate_id"
    GET_BONDS = "get_bonds"
    GET_ECERT = "get_ecert"


# Names deployed clients already send
ALIASES = {"tranfer_bond": Operation.TRANSFER_BOND}


@dataclass(frozen=True)
class NoArgs:
    pass


@dataclass(frozen=True)
class CreateBondArgs:
    fields: tuple[str, ...]


@dataclass(frozen=True)
class TransferBondArgs:
    real_estate_id: str
    new_owner_national_id: str


@dataclass(frozen=True)
class RealEstateIdArgs:
    real_estate_id: str


@dataclass(frozen=True)
class NameArgs:
    name: str


def _real_estate_id(operation: Operation, value: str) -> str:
    if not value:
        raise ArgumentError(f"{operation.value}: real_estate_id must not be empty")
    return value


def _parse_create(args: list[str]) -> CreateBondArgs:
    _real_estate_id(Operation.CREATE_BOND, args[1])
    return CreateBondArgs(fields=tuple(args))


def _parse_transfer(args: list[str]) -> TransferBondArgs:
    return TransferBondArgs(
        real_estate_id=_real_estate_id(Operation.TRANSFER_BOND, args[0]),
        new_owner_national_id=args[1],
    )


def _parse_name(args: list[str]) -> NameArgs:
    if not args[0]:
        raise ArgumentError(f"{Operation.GET_ECERT.value}: user name must not be empty")
    return NameArgs(name=args[0])


# Operation -> (argument count, parser)
ARGUMENT_SPECS: dict[Operation, tuple[int, Callable[[list[str]], Any]]] = {
    Operation.CREATE_BOND: (Bond.FIELD_COUNT, _parse_create),
    Operation.TRANSFER_BOND: (2, _parse_transfer),
    Operation.PING: (0, lambda args: NoArgs()),
    Operation.GET_BOND_DETAILS: (
        1,
        lambda args: RealEstateIdArgs(_real_estate_id(Operation.GET_BOND_DETAILS, args[0])),
    ),
    Operation.CHECK_UNIQUE_REAL_ESTATE_ID: (
        1,
        lambda args: RealEstateIdArgs(_real_estate_id(Operation.CHECK_UNIQUE_REAL_ESTATE_ID, args[0])),
    ),
    Operation.GET_BONDS: (0, lambda args: NoArgs()),
    Operation.GET_ECERT: (1, _parse_name),
}


def parse_arguments(operation: Operation, args: list[str]) -> Any:
    """Check the argument count for ``operation`` and parse ``args``.

    Raises
    ------
    ArgumentError
        Wrong count, or an empty id where one is required.
    """
    expected, parser = ARGUMENT_SPECS[operation]
    if len(args) != expected:
        raise ArgumentError(
            f"{operation.value}: incorrect number of arguments, expected {expected}, got {len(args)}"
        )
    return parser(list(args))


@dataclass
class Response:
    """Outcome of one invocation.

    ``error`` is set when the call failed. ``check_unique_real_estate_id``
    is the one operation that fills both: ``b"false"`` plus an
    :class:`AlreadyExistsError`.
    """

    payload: bytes = b""
    error: BondRegistryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> bytes:
        """Return the payload, or raise the error if there is one."""
        if self.error is not None:
            raise self.error
        return self.payload


class Router:
    """Route invocations to the repository and credential directory."""

    MUTATING = frozenset({Operation.CREATE_BOND, Operation.PING, Operation.TRANSFER_BOND})
    READ_ONLY = frozenset(
        {
            Operation.GET_BOND_DETAILS,
            Operation.CHECK_UNIQUE_REAL_ESTATE_ID,
            Operation.GET_BONDS,
            Operation.GET_ECERT,
            Operation.PING,
        }
    )

    def __init__(self, repository: BondRepository, directory: CredentialDirectory) -> None:
        self.repository = repository
        self.directory = directory
        self._handlers: dict[Operation, Callable[[Any], Response]] = {
            Operation.CREATE_BOND: self._create_bond,
            Operation.TRANSFER_BOND: self._transfer_bond,
            Operation.PING: self._ping,
            Operation.GET_BOND_DETAILS: self._get_bond_details,
            Operation.CHECK_UNIQUE_REAL_ESTATE_ID: self._check_unique,
            Operation.GET_BONDS: self._get_bonds,
            Operation.GET_ECERT: self._get_ecert,
        }

    def invoke(self, function: str, args: list[str]) -> Response:
        """Run a mutating operation."""
        return self._dispatch("invoke", function, args, self.MUTATING)

    def query(self, function: str, args: list[str]) -> Response:
        """Run a read-only operation."""
        return self._dispatch("query", function, args, self.READ_ONLY)

    def _dispatch(
        self,
        entry: str,
        function: str,
        args: list[str],
        allowed: frozenset[Operation],
    ) -> Response:
        try:
            operation = self.resolve(function, allowed)
            parsed = parse_arguments(operation, args)
            logger.debug("%s %s", entry, operation.value, extra={"operation": operation.value})
            return self._handlers[operation](parsed)
        except BondRegistryError as e:
            logger.warning("%s %s failed: %s", entry, function, e, extra={"operation": function})
            return Response(error=e)

    @staticmethod
    def resolve(function: str, allowed: frozenset[Operation]) -> Operation:
        """Map an operation name onto one of the ``allowed`` operations."""
        operation = ALIASES.get(function)
        if operation is None:
            try:
                operation = Operation(function)
            except ValueError:
                raise UnknownOperationError(f"Received unknown function invocation {function}") from None
        if operation not in allowed:
            raise UnknownOperationError(f"Function of the name {function} doesn't exist here")
        return operation

    # Mutating
    def _create_bond(self, args: CreateBondArgs) -> Response:
        self.repository.create(*args.fields)
        return Response()

    def _transfer_bond(self, args: TransferBondArgs) -> Response:
        try:
            bond = self.repository.retrieve(args.real_estate_id)
        except BondNotFoundError as e:
            raise BondNotFoundError(
                f"transfer_bond: cannot find bond by given real_estate_id {args.real_estate_id}"
            ) from e
        self.repository.transfer(bond, args.new_owner_national_id)
        return Response()

    def _ping(self, args: NoArgs) -> Response:
        return Response(payload=bootstrap.ping())

    # Read-only
    def _get_bond_details(self, args: RealEstateIdArgs) -> Response:
        return Response(payload=encode_bond(self.repository.retrieve(args.real_estate_id)))

    def _check_unique(self, args: RealEstateIdArgs) -> Response:
        if self.repository.check_unique(args.real_estate_id):
            return Response(payload=b"true")
        return Response(
            payload=b"false",
            error=AlreadyExistsError(f"real_estate_id {args.real_estate_id} is not unique"),
        )

    def _get_bonds(self, args: NoArgs) -> Response:
        return Response(payload=encode_bond_list(self.repository.list_all()))

    def _get_ecert(self, args: NameArgs) -> Response:
        return Response(payload=self.directory.get_ecert(args.name))
