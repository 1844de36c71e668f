"""
Round Engine Web App
Streamlit interface for playing a session.
"""

import pandas as pd
import streamlit as st

from balatro_rules.engine.errors import GameRuleError
from balatro_rules.engine.game import RoundPhase
from balatro_rules.presets import PRESETS, create_game

# Page config
st.set_page_config(
    page_title="Poker Rounds",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Poker Rounds")
st.markdown("*Beat the blind with poker hands*")

# Sidebar for settings
st.sidebar.header("Settings")

preset_options = list(PRESETS.keys())
selected_preset = st.sidebar.selectbox(
    "Preset",
    options=preset_options,
    format_func=lambda x: PRESETS[x].name
)
st.sidebar.markdown(f"*{PRESETS[selected_preset].description}*")

if "game" not in st.session_state or st.sidebar.button("New Session", use_container_width=True):
    st.session_state.game = create_game(selected_preset)
    st.session_state.last_result = None
    st.session_state.message = None

game = st.session_state.game

# Round stats
st.subheader(f"Round {game.round_number}")
col1, col2, col3, col4, col5, col6 = st.columns(6)
with col1:
    st.metric("Score", f"{game.round_score:,}")
with col2:
    st.metric("Blind", f"{game.blind_requirement:,.0f}")
with col3:
    st.metric("Hands", game.plays_left)
with col4:
    st.metric("Discards", game.discards_left)
with col5:
    st.metric("Ante / Round", f"{game.ante} / {game.round_number}")
with col6:
    st.metric("Money", f"${game.money}")

if st.session_state.message:
    st.warning(st.session_state.message)
    st.session_state.message = None

# Last played hand
result = st.session_state.last_result
if result is not None:
    b = result.breakdown
    st.info(f"**{result.hand_type.display_name}**: {b.pre_multiply} Chips × {b.combined_mult} Mult"
            f" = {result.gained:,}  ·  {'  '.join(c.label for c in game.last_played)}")
    with st.expander("Score details"):
        for line in b.details:
            st.write(line)

st.divider()

if game.phase == RoundPhase.IN_ROUND:
    # Hand selection
    st.subheader("Your hand")
    selected = []
    columns = st.columns(max(1, len(game.hand)))
    for i, (column, card) in enumerate(zip(columns, game.hand)):
        with column:
            if st.checkbox(card.label, key=f"card_{game.round_number}_{id(card)}"):
                selected.append(i)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("▶ Play Hand", type="primary", use_container_width=True):
            try:
                st.session_state.last_result = game.play(selected)
            except GameRuleError as e:
                st.session_state.message = str(e)
            st.rerun()
    with col2:
        if st.button("🗑 Discard", use_container_width=True):
            try:
                game.discard(selected)
            except GameRuleError as e:
                st.session_state.message = str(e)
            st.rerun()

elif game.phase == RoundPhase.ROUND_WON:
    st.success(f"🏆 Round {game.round_number} won!")
    st.subheader("Upgrades on offer")
    offered = game.last_choices
    columns = st.columns(max(1, len(offered)))
    for column, upgrade in zip(columns, offered):
        with column:
            st.markdown(f"**{upgrade.name}** (${upgrade.cost})")
            st.caption(upgrade.description)
            if st.button("Buy", key=f"buy_{upgrade.id}", disabled=game.money < upgrade.cost):
                if game.purchase_upgrade(upgrade):
                    game.start_new_round()
                    st.session_state.last_result = None
                else:
                    st.session_state.message = "Not enough money to buy this upgrade."
                st.rerun()
    if st.button("Skip ▶ Next round", use_container_width=True):
        game.start_new_round()
        st.session_state.last_result = None
        st.rerun()

else:
    st.error(f"💀 Out of hands. {game.round_score:,} / {game.blind_requirement:,.0f}")
    if st.button("Back to round one", type="primary", use_container_width=True):
        game.reset_to_round_one()
        st.session_state.last_result = None
        st.rerun()

st.divider()

# Summary panels
col1, col2 = st.columns([1, 2])

with col1:
    st.subheader("🃏 Upgrades")
    if len(game.owned_upgrades):
        for upgrade in game.owned_upgrades:
            st.markdown(f"- **{upgrade.name}**: {upgrade.description}")
    else:
        st.markdown("*None owned*")

with col2:
    st.subheader("📜 Plays")
    plays = game.history.plays()
    if plays:
        table = pd.DataFrame(plays)[["round", "ante", "hand_type", "chips", "mult", "gained", "round_score"]]
        st.dataframe(table.iloc[::-1], use_container_width=True, hide_index=True)
    else:
        st.markdown("*No hands played yet*")

st.caption(f"Lifetime: {game.lifetime_total_chips:,} chips, ×{game.lifetime_total_mult:,} mult")
