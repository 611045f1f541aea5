"""Shared test fixtures."""

import pytest

from traitdiff.analyzers.base import ServiceBlock


RPC_API_SOURCE = '''use serde::{Deserialize, Serialize};

/// Not the service.
pub trait Helper {
    fn helper(&self);
}

#[tarpc::service]
pub trait RpcApi {
    /// Returns true when the node is alive.
    /// Second line of docs.
    async fn ping() -> bool;

    // internal note
    async fn get_height() -> u64;

    /* block
       comment */
    async fn send(
        to: Address,
        amount: u64,
    ) -> Result<Digest, String>;
}

pub struct Other {}
'''


def _write_trait(path, *methods, marker="#[tarpc::service]", name="RpcApi"):
    """Write a file holding one service trait with the given method lines."""
    body = "\n".join(f"    {m}" for m in methods)
    path.write_text(f"{marker}\npub trait {name} {{\n{body}\n}}\n")
    return path


def _make_block(*lines, source_name="test.rs"):
    return ServiceBlock(
        source_name=source_name,
        lines=tuple(lines),
        start_line=1,
        end_line=len(lines),
    )


@pytest.fixture
def write_trait():
    """Factory writing a one-trait source file."""
    return _write_trait


@pytest.fixture
def make_block():
    """Factory building a ServiceBlock from raw lines."""
    return _make_block


@pytest.fixture
def rpc_api_file(tmp_path):
    """A realistic rpc_api.rs with docs, comments and a wrapped signature."""
    path = tmp_path / "rpc_api.rs"
    path.write_text(RPC_API_SOURCE)
    return path


@pytest.fixture
def new_api_file(tmp_path):
    """First file of the ping/get_height/get_peers scenario."""
    return _write_trait(
        tmp_path / "new.rs",
        "async fn ping() -> bool;",
        "async fn get_height() -> u64;",
    )


@pytest.fixture
def old_api_file(tmp_path):
    """Second file: ``pub`` added to ping, get_peers only here."""
    return _write_trait(
        tmp_path / "old.rs",
        "pub async fn ping() -> bool;",
        "async fn get_peers() -> Vec<Peer>;",
    )
