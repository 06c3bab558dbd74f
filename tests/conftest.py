import pytest

SAMPLE_ZSHRC = """\
# Section: Oh My Zsh
export ZSH="$HOME/.oh-my-zsh"
ZSH_THEME="robbyrussell"
plugins=(git docker kubectl)
source $ZSH/oh-my-zsh.sh

## Aliases ##
alias ll='ls -la'
alias gs="git status"

# --- History --- #
HISTSIZE=10000
SAVEHIST=10000
setopt SHARE_HISTORY
# --- end --- #

setup_env() {
  export EDITOR=vim
}

bindkey '^R' history-incremental-search-backward
"""


@pytest.fixture
def sample_zshrc() -> str:
    return SAMPLE_ZSHRC


@pytest.fixture
def zshrc_file(tmp_path):
    path = tmp_path / ".zshrc"
    path.write_text(SAMPLE_ZSHRC, encoding="utf-8")
    return path
