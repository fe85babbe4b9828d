import typing
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractInstance, ContractTransactionHandler
from ape.utils import ZERO_ADDRESS
from eth_typing import ChecksumAddress
from eth_utils import from_wei, to_checksum_address
from web3 import Web3

from deployment.artifacts import ContractArtifact, contract_at, load_artifact
from deployment.config import DeploymentConfig
from deployment.confirm import _confirm_resolution, _continue
from deployment.dependencies import DependencyManifest, dependencies_from_config
from deployment.exceptions import DeploymentConfigError
from deployment.liquidity import create_pool
from deployment.manifest import (
    DeployedContractRecord,
    manifest_from_deployments,
    write_manifest,
)
from deployment.networks import estimate_deploy_fee
from deployment.utils import (
    _load_yaml,
    get_contract_artifacts_dir,
    get_manifest_filepath,
    validate_config,
    validate_network,
)
from deployment.zksync import ZkSyncDeployer

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"
CONTRACT_CALLS_PARAMETER_KEY = "calls"
LIQUIDITY_PARAMETER_KEY = "liquidity"
CALL_DELIMITER = "."

w3 = Web3()


class VariableContext:
    def __init__(
        self,
        contract_names: List[str],
        contract_name: Optional[str] = None,
        constants: typing.Dict[str, Any] = None,
        dependencies: Optional[DependencyManifest] = None,
        deployments: Optional[typing.Dict[str, DeployedContractRecord]] = None,
        deployer_address: Optional[ChecksumAddress] = None,
    ):
        # contracts that may be referenced: the ones deployed before this one
        self.contract_names = contract_names or list()
        self.contract_name = contract_name
        self.constants = constants or dict()
        self.dependencies = dependencies or DependencyManifest.empty()
        self.deployments = deployments if deployments is not None else dict()
        self.deployer_address = deployer_address

    def for_contract(self, contract_name: str, contract_names: List[str]) -> "VariableContext":
        """Returns a context sharing this one's state, scoped to a single contract."""
        return VariableContext(
            contract_names=contract_names,
            contract_name=contract_name,
            constants=self.constants,
            dependencies=self.dependencies,
            deployments=self.deployments,
            deployer_address=self.deployer_address,
        )


# Variables


class Variable(ABC):
    VARIABLE_PREFIX = "$"

    @abstractmethod
    def resolve(self, eager: bool = False) -> Any:
        """
        Resolves the variable. With eager=True, references to contracts that
        are not deployed yet resolve to the zero address (pre-deployment validation).
        """
        raise NotImplementedError

    @classmethod
    def is_variable(cls, param: Any) -> bool:
        """Returns True if the param is a variable."""
        result = isinstance(param, str) and param.startswith(cls.VARIABLE_PREFIX)
        return result


class DeployerAccount(Variable):
    DEPLOYER_INDICATOR = "deployer"

    def __init__(self, context: VariableContext):
        self.context = context

    @classmethod
    def is_deployer(cls, value: str) -> bool:
        """Returns True if the variable is a special deployer variable."""
        return value == cls.DEPLOYER_INDICATOR

    def resolve(self, eager: bool = False) -> Any:
        if self.context.deployer_address is None:
            return ZERO_ADDRESS
        return self.context.deployer_address


class Constant(Variable):
    def __init__(self, constant_name: str, context: VariableContext):
        try:
            self.constant_value = context.constants[constant_name]
        except KeyError:
            raise DeploymentConfigError(f"Constant '{constant_name}' not found in deployment file.")

    @classmethod
    def is_constant(cls, value: str) -> bool:
        """Returns True if the variable is a deployment constant."""
        return value.isupper()

    def resolve(self, eager: bool = False) -> Any:
        return self.constant_value


class Dependency(Variable):
    DEPENDENCY_PREFIX = "dependency:"

    def __init__(self, variable: str, context: VariableContext):
        dependency_name = variable[len(self.DEPENDENCY_PREFIX) :]
        if dependency_name not in context.dependencies.addresses:
            raise DeploymentConfigError(
                f"Dependency '{dependency_name}' not found in dependency contracts."
            )
        self.dependency_name = dependency_name
        self.dependencies = context.dependencies

    @classmethod
    def is_dependency(cls, value: str) -> bool:
        """Returns True if the variable refers to an externally deployed dependency."""
        return value.startswith(cls.DEPENDENCY_PREFIX)

    def resolve(self, eager: bool = False) -> Any:
        return to_checksum_address(self.dependencies.addresses[self.dependency_name])


class ContractName(Variable):
    def __init__(self, contract_name: str, context: VariableContext):
        if contract_name not in context.contract_names:
            raise DeploymentConfigError(
                f"Contract name {contract_name} referenced by {context.contract_name} "
                f"is not deployed before it"
            )

        self.contract_name = contract_name
        self.deployments = context.deployments

    def resolve(self, eager: bool = False) -> Any:
        """Resolves a contract address."""
        record = self.deployments.get(self.contract_name)
        if record is None:
            if eager:
                return ZERO_ADDRESS
            raise DeploymentConfigError(f"{self.contract_name} has not been deployed yet.")
        return record.address


def _resolve_param(value: Any, eager: bool = False) -> Any:
    """Resolves a single parameter value or a list of parameter values."""
    if isinstance(value, list):
        return [_resolve_param(v, eager) for v in value]

    if isinstance(value, Variable):
        return value.resolve(eager)

    return value  # literally a value


def _resolve_params(parameters: OrderedDict, eager: bool = False) -> OrderedDict:
    resolved_parameters = OrderedDict()
    for name, value in parameters.items():
        resolved_parameters[name] = _resolve_param(value, eager)

    return resolved_parameters


def _variable_from_value(variable: Any, context: VariableContext) -> Variable:
    variable = variable.strip(Variable.VARIABLE_PREFIX)
    if DeployerAccount.is_deployer(variable):
        return DeployerAccount(context)
    elif Dependency.is_dependency(variable):
        return Dependency(variable, context)
    elif Constant.is_constant(variable):
        return Constant(variable, context)
    else:
        return ContractName(variable, context)


def _process_raw_value(value: Any, variable_context: VariableContext) -> Any:
    if isinstance(value, list):
        return [_process_raw_value(v, variable_context) for v in value]

    if Variable.is_variable(value):
        value = _variable_from_value(value, variable_context)

    return value


def _process_raw_values(values: OrderedDict, variable_context: VariableContext) -> OrderedDict:
    processed_parameters = OrderedDict()
    for name, value in values.items():
        processed_parameters[name] = _process_raw_value(value, variable_context)

    return processed_parameters


def _get_contract_names(config: typing.Dict) -> List[str]:
    contract_names = list()
    for contract_info in config["contracts"]:
        if isinstance(contract_info, str):
            contract_names.append(contract_info)
        elif isinstance(contract_info, dict) and len(contract_info) == 1:
            contract_names.extend(list(contract_info.keys()))
        else:
            raise DeploymentConfigError("Malformed constructor parameters YAML.")

    duplicates = {name for name in contract_names if contract_names.count(name) > 1}
    if duplicates:
        raise DeploymentConfigError(f"Contracts listed more than once: {', '.join(duplicates)}")
    return contract_names


def _get_contract_data(contract_info: Any) -> typing.Tuple[str, typing.Dict]:
    if isinstance(contract_info, str):
        return contract_info, dict()
    contract_name = list(contract_info.keys())[0]  # only one entry
    contract_data = contract_info[contract_name] or dict()
    if not isinstance(contract_data, dict):
        raise DeploymentConfigError(f"Malformed constructor parameter config for {contract_name}.")
    return contract_name, contract_data


def _validate_method_args(
    method_abis: List[Any], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = {}
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.canonical_type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def _validate_constructor_abi_inputs(
    contract_name: str,
    abi_inputs: List[Any],
    resolved_parameters: OrderedDict,
) -> None:
    """Validates the constructor parameters against the constructor ABI."""
    if len(resolved_parameters) != len(abi_inputs):
        raise ConstructorParameters.Invalid(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(resolved_parameters)}."
        )
    if not abi_inputs:
        return  # no constructor parameters

    codex = enumerate(zip(abi_inputs, resolved_parameters.items()), start=0)
    for position, (abi_input, resolved_input) in codex:
        name, value = resolved_input
        # validate name
        if abi_input.name != name:
            raise ConstructorParameters.Invalid(
                f"{contract_name} constructor parameter '{name}' at position {position} does not "
                f"match the expected ABI name '{abi_input.name}'."
            )

        # validate value type
        if not w3.is_encodable(abi_input.canonical_type, value):
            raise ConstructorParameters.Invalid(
                f"Constructor param name '{name}' at position {position} has a value '{value}' "
                f"whose type does not match expected ABI type '{abi_input.canonical_type}'"
            )


def validate_constructor_parameters(
    contracts_parameters: OrderedDict, artifacts: typing.Dict[str, ContractArtifact]
) -> None:
    """Validates the constructor parameters for all contracts in a single config."""
    for contract, parameters in contracts_parameters.items():
        resolved_parameters = _resolve_params(parameters=parameters, eager=True)
        _validate_constructor_abi_inputs(
            contract_name=contract,
            abi_inputs=artifacts[contract].constructor_inputs,
            resolved_parameters=resolved_parameters,
        )


class ConstructorParameters:
    """Represents the constructor parameters for a set of contracts."""

    class Invalid(DeploymentConfigError):
        """Raised when the constructor parameters are invalid"""

    def __init__(self, parameters: OrderedDict, artifacts: typing.Dict[str, ContractArtifact]):
        self.parameters = parameters
        validate_constructor_parameters(parameters, artifacts)

    @classmethod
    def from_config(
        cls,
        config: typing.Dict,
        artifacts: typing.Dict[str, ContractArtifact],
        context: VariableContext,
    ) -> "ConstructorParameters":
        """
        Loads the constructor parameters from a parsed params file.
        A contract may only reference contracts listed before it.
        """
        print("Processing contract constructor parameters...")
        contracts_config = OrderedDict()
        contract_names = _get_contract_names(config)
        for position, contract_info in enumerate(config["contracts"]):
            contract_name, contract_data = _get_contract_data(contract_info)
            parameter_values = OrderedDict()
            if contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY):
                parameter_values = _process_raw_values(
                    contract_data[CONTRACT_CONSTRUCTOR_PARAMETER_KEY],
                    context.for_contract(contract_name, contract_names[:position]),
                )
            contracts_config[contract_name] = parameter_values

        return cls(parameters=contracts_config, artifacts=artifacts)

    def resolve(self, contract_name: str) -> OrderedDict:
        """Resolves the constructor parameters for a single contract."""
        resolved_params = _resolve_params(self.parameters[contract_name])
        return resolved_params


class PostDeployCall(NamedTuple):
    """A transaction sent to an already deployed contract once a step's contract is deployed."""

    contract_name: str
    method_name: str
    args: List[Any]

    def __str__(self) -> str:
        return f"{self.contract_name}{CALL_DELIMITER}{self.method_name}"


class PostDeployCalls:
    """Represents the wiring calls to perform after each contract deployment."""

    class Invalid(DeploymentConfigError):
        """Raised when a post-deployment call is invalid"""

    def __init__(
        self,
        calls: typing.Dict[str, List[PostDeployCall]],
        artifacts: typing.Dict[str, ContractArtifact],
    ):
        self.calls = calls
        self._validate(artifacts)

    @classmethod
    def from_config(
        cls,
        config: typing.Dict,
        artifacts: typing.Dict[str, ContractArtifact],
        context: VariableContext,
    ) -> "PostDeployCalls":
        """Calls of a contract may target that contract or any contract listed before it."""
        contract_names = _get_contract_names(config)
        calls = OrderedDict()
        for position, contract_info in enumerate(config["contracts"]):
            contract_name, contract_data = _get_contract_data(contract_info)
            variable_context = context.for_contract(contract_name, contract_names[: position + 1])
            contract_calls = list()
            for call_info in contract_data.get(CONTRACT_CALLS_PARAMETER_KEY) or list():
                contract_calls.append(cls._process_call(call_info, variable_context))
            calls[contract_name] = contract_calls

        return cls(calls=calls, artifacts=artifacts)

    @classmethod
    def _process_call(cls, call_info: Any, context: VariableContext) -> PostDeployCall:
        if not isinstance(call_info, dict) or len(call_info) != 1:
            raise cls.Invalid(f"Malformed call for {context.contract_name}.")

        target = list(call_info.keys())[0]  # only one entry
        if target.count(CALL_DELIMITER) != 1:
            raise cls.Invalid(f"Call '{target}' must be written as <Contract>.<method>.")
        contract_name, method_name = target.split(CALL_DELIMITER)
        if contract_name not in context.contract_names:
            raise cls.Invalid(
                f"Call '{target}' of {context.contract_name} targets a contract "
                f"that is not deployed before it."
            )

        raw_args = call_info[target]
        if raw_args is None:
            raw_args = list()
        elif not isinstance(raw_args, list):
            raw_args = [raw_args]
        args = [_process_raw_value(arg, context) for arg in raw_args]
        return PostDeployCall(contract_name=contract_name, method_name=method_name, args=args)

    def _validate(self, artifacts: typing.Dict[str, ContractArtifact]) -> None:
        for contract_calls in self.calls.values():
            for call in contract_calls:
                method_abis = artifacts[call.contract_name].method_abis(call.method_name)
                if not method_abis:
                    raise self.Invalid(f"{call.contract_name} has no method '{call.method_name}'.")
                try:
                    _validate_method_args(method_abis, _resolve_param(call.args, eager=True))
                except ValueError as e:
                    raise self.Invalid(f"Invalid arguments for {call}: {e}") from e

    def get(self, contract_name: str) -> List[PostDeployCall]:
        return self.calls.get(contract_name, list())

    @staticmethod
    def resolve(call: PostDeployCall) -> List[Any]:
        return _resolve_param(call.args)


class LiquidityParameters:
    """Represents the pool to create once every contract is deployed."""

    POOL_KEY = "pool"
    POOL_ABI_KEY = "pool_abi"
    ROUTER_KEY = "router"
    FACTORY_KEY = "factory"
    TOKENS_KEY = "tokens"

    DEFAULT_POOL_ABI = "classicPool"

    class Invalid(DeploymentConfigError):
        """Raised when the liquidity parameters are invalid"""

    def __init__(
        self,
        pool_name: str,
        router: str,
        factory: str,
        tokens: List[Any],
        pool_abi: str = DEFAULT_POOL_ABI,
    ):
        self.pool_name = pool_name
        self.router = router
        self.factory = factory
        self.tokens = tokens
        self.pool_abi = pool_abi

    @classmethod
    def from_config(
        cls, config: typing.Dict, context: VariableContext
    ) -> Optional["LiquidityParameters"]:
        liquidity_config = config.get(LIQUIDITY_PARAMETER_KEY)
        if not liquidity_config:
            return None

        print("Processing liquidity parameters...")
        try:
            pool_name = liquidity_config[cls.POOL_KEY]
            router = liquidity_config[cls.ROUTER_KEY]
            factory = liquidity_config[cls.FACTORY_KEY]
            raw_tokens = liquidity_config[cls.TOKENS_KEY]
        except KeyError as e:
            raise cls.Invalid(f"Liquidity parameters missing '{e.args[0]}' field.") from e

        if not isinstance(raw_tokens, list) or len(raw_tokens) != 2:
            raise cls.Invalid("Liquidity parameters must name exactly two tokens.")
        for dependency_name in (router, factory):
            if dependency_name not in context.dependencies.addresses:
                raise cls.Invalid(f"'{dependency_name}' is not a known dependency contract.")
            if dependency_name not in context.dependencies.abis:
                raise cls.Invalid(f"No ABI loaded for dependency '{dependency_name}'.")

        pool_abi = liquidity_config.get(cls.POOL_ABI_KEY, cls.DEFAULT_POOL_ABI)
        if pool_abi not in context.dependencies.abis:
            raise cls.Invalid(f"No ABI loaded for pool ABI '{pool_abi}'.")

        contract_names = _get_contract_names(config)
        if pool_name in contract_names:
            raise cls.Invalid(f"Pool name '{pool_name}' clashes with a deployed contract.")

        # the pool is created after every contract is deployed
        variable_context = context.for_contract(pool_name, contract_names)
        tokens = [_process_raw_value(token, variable_context) for token in raw_tokens]
        return cls(
            pool_name=pool_name,
            router=router,
            factory=factory,
            tokens=tokens,
            pool_abi=pool_abi,
        )

    def resolve_tokens(self) -> typing.Tuple[ChecksumAddress, ChecksumAddress]:
        token_a, token_b = _resolve_param(self.tokens)
        return token_a, token_b


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        """Sends a transaction and blocks until it is confirmed."""
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        receipt = method(*args, sender=self._account)
        return receipt.await_confirmations()


class Deployer(Transactor):
    """
    Represents an ape account plus deployment parameters for the contract suite,
    plus validated/annotated execution in the order of the params file.
    """

    def __init__(
        self,
        params: typing.Dict,
        path: Path,
        config: DeploymentConfig,
        account: typing.Optional[AccountAPI] = None,
        dependencies: Optional[DependencyManifest] = None,
        zksync: Optional[ZkSyncDeployer] = None,
    ):
        super().__init__(account, config.autosign)

        validate_config(params)
        self.path = path
        self.params = params
        self.config = config
        self.zksync = zksync
        self._validate_zksync_deployer()
        self.manifest_filepath = get_manifest_filepath(params, config.project_root)
        self.estimate_fees = bool(params["deployment"].get("estimate_fees", False))

        if dependencies is None:
            dependencies = dependencies_from_config(params, config.project_root)
        self.dependencies = dependencies

        self.contract_names = _get_contract_names(params)
        self.artifacts = self._load_artifacts()

        self.deployments: typing.Dict[str, DeployedContractRecord] = OrderedDict()
        self._instances: typing.Dict[str, ContractInstance] = dict()

        context = VariableContext(
            contract_names=self.contract_names,
            constants=params.get("constants"),
            dependencies=self.dependencies,
            deployments=self.deployments,
            deployer_address=self._account.address,
        )
        self.constructor_parameters = ConstructorParameters.from_config(
            params, self.artifacts, context
        )
        self.post_deploy_calls = PostDeployCalls.from_config(params, self.artifacts, context)
        self.liquidity_parameters = LiquidityParameters.from_config(params, context)

        self._print_deployment_info()

        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    def _validate_zksync_deployer(self) -> None:
        if not self.config.is_zksync:
            if self.zksync is not None:
                raise DeploymentConfigError(
                    f"The {self.config.variant} variant is not deployed to zkSync."
                )
            return
        if self.zksync is None:
            raise DeploymentConfigError(
                f"The {self.config.variant} variant needs a zkSync deployer."
            )
        if to_checksum_address(self.zksync.address) != to_checksum_address(self._account.address):
            raise DeploymentConfigError(
                f"The zkSync signing key ({self.zksync.address}) does not belong "
                f"to the account {self._account.address}."
            )

    @classmethod
    def from_yaml(cls, config: DeploymentConfig, *args, **kwargs) -> "Deployer":
        params = _load_yaml(config.params_filepath)
        return cls(params=params, path=config.params_filepath, config=config, *args, **kwargs)

    def _load_artifacts(self) -> typing.Dict[str, ContractArtifact]:
        artifacts_dir = get_contract_artifacts_dir(self.params, self.config.project_root)
        print(f"Loading contract artifacts from {artifacts_dir}...")
        artifacts = OrderedDict()
        for contract_name in self.contract_names:
            artifacts[contract_name] = load_artifact(contract_name, artifacts_dir)
        return artifacts

    def deploy_all(self) -> List[DeployedContractRecord]:
        """Deploys every contract of the params file in order, then creates the pool, if any."""
        validate_network(self.params)
        for contract_name in self.contract_names:
            self.deploy(contract_name)

        if self.liquidity_parameters:
            self.bootstrap_liquidity()

        return list(self.deployments.values())

    def deploy(self, contract_name: str) -> ContractInstance:
        if contract_name in self.deployments:
            raise DeploymentConfigError(f"{contract_name} is already deployed.")

        artifact = self.artifacts[contract_name]
        resolved_constructor_params = self.constructor_parameters.resolve(contract_name)
        if self.estimate_fees:
            self._estimate_fee(artifact, resolved_constructor_params)

        instance = self._deploy_contract(artifact, resolved_constructor_params)
        record = DeployedContractRecord(
            name=contract_name,
            address=to_checksum_address(instance.address),
            abi=artifact.abi,
        )
        self.deployments[contract_name] = record
        self._instances[contract_name] = instance
        print(f"{contract_name} was deployed to {record.address}")

        for call in self.post_deploy_calls.get(contract_name):
            self._execute_call(call)

        return instance

    def _estimate_fee(self, artifact: ContractArtifact, resolved_params: OrderedDict) -> None:
        """Prints the estimated deployment cost; a failed estimate never blocks the deployment."""
        try:
            if self.zksync is not None:
                fee = self.zksync.estimate_fee(artifact, *resolved_params.values())
            else:
                fee = estimate_deploy_fee(
                    artifact.container,
                    *resolved_params.values(),
                    sender=self.get_account().address,
                )
        except Exception as e:
            print(f"(!) Could not estimate the {artifact.name} deployment fee: {e}")
            return
        print(f"The {artifact.name} deployment is estimated to cost {from_wei(fee, 'ether')} ETH")

    def _deploy_contract(
        self, artifact: ContractArtifact, resolved_params: OrderedDict
    ) -> ContractInstance:
        if not self._autosign:
            _confirm_resolution(resolved_params, artifact.name)
        if self.zksync is not None:
            return self.zksync.deploy(artifact, *resolved_params.values())

        deployment_params = [artifact.container, *resolved_params.values()]
        deployer_account = self.get_account()
        return deployer_account.deploy(*deployment_params)

    def _execute_call(self, call: PostDeployCall) -> ReceiptAPI:
        instance = self._instances[call.contract_name]
        method = getattr(instance, call.method_name)
        return self.transact(method, *self.post_deploy_calls.resolve(call))

    def bootstrap_liquidity(self) -> DeployedContractRecord:
        """Creates the configured pool through the router and records its address."""
        params = self.liquidity_parameters
        abis, addresses = self.dependencies.abis, self.dependencies.addresses
        router = contract_at(params.router, abis[params.router], addresses[params.router])
        factory = contract_at(params.factory, abis[params.factory], addresses[params.factory])
        token_a, token_b = params.resolve_tokens()

        print(f"\nCreating {params.pool_name} pool for {token_a} and {token_b}")
        pool_address = create_pool(
            transactor=self,
            router=router,
            factory=factory,
            token_a=token_a,
            token_b=token_b,
            timeout=self.config.pool_timeout,
        )
        record = DeployedContractRecord(
            name=params.pool_name,
            address=pool_address,
            abi=abis[params.pool_abi],
        )
        self.deployments[params.pool_name] = record
        print(f"{params.pool_name} was created at {pool_address}")
        return record

    def finalize(self) -> Path:
        """Writes the dependency and deployed contracts to the manifest."""
        manifest = manifest_from_deployments(
            dependencies=self.dependencies, deployments=self.deployments.values()
        )
        filepath = write_manifest(manifest=manifest, filepath=self.manifest_filepath)
        print(f"(i) Manifest written to {filepath}!")
        return filepath

    def _print_deployment_info(self):
        print(
            f"Account: {self.get_account().address}",
            f"Variant: {self.config.variant}",
            f"Config: {self.path}",
            f"Manifest: {self.manifest_filepath}",
            f"Network: {self.config.network_choice}",
            f"L1 Network: {self.config.l1_network}",
            f"Contracts: {', '.join(self.contract_names)}",
            sep="\n",
        )
