# https://networkx.org/documentation/stable/reference/classes/digraph.html

import time

import matplotlib.pyplot as plt
import streamlit as st

from number_game.diagram import MAX_DIAGRAM_DEPTH, draw_game_tree
from number_game.errors import NumberGameError
from number_game.runner import GameRunner
from number_game.search import best_move
from number_game.state import (DEFAULT_SEQUENCE, Role, Side, format_sequence,
                               index_parity_sums, parse_sequence)
from number_game.tree import build_tree, count_nodes, optimal_path

THINKING_DELAY_S = 1.0
VIZ_LENGTH_LIMIT = 12   # keeps the full tree small enough to rebuild on every rerun
HUMAN, COMPUTER = Role.MAX, Role.MIN
STRATEGIES = ["Optimal (α–β minimax)", "Minimax (no pruning)"]

# =========================
# Session helpers
# =========================
def _new_runner(seq, starter: str, strategy: str) -> GameRunner:
    first = HUMAN if starter == "You (Player 1)" else COMPUTER
    return GameRunner(seq, first, automated=(COMPUTER,), prune=(strategy == STRATEGIES[0]))

def _who(role: Role) -> str:
    return "You" if role is HUMAN else "Computer"

def _rebuild_viz(seq):
    """Recompute the full tree, its optimal line, and what alpha-beta skips."""
    root = build_tree(seq, Role.MAX, limit=VIZ_LENGTH_LIMIT)
    st.session_state.viz_seq = tuple(seq)
    st.session_state.viz_root = root
    st.session_state.viz_path = optimal_path(root)
    st.session_state.viz_pruned = best_move(seq).stats.pruned_paths
    st.session_state.viz_i = 0
    st.session_state.viz_playing = False

# =========================
# UI / Layout
# =========================
st.set_page_config(page_title="Number Game — Minimax & Alpha-Beta", layout="wide")

# center the content
st.markdown(
    """
    <style>
      [data-testid="stAppViewContainer"] > .main .block-container { max-width: 60vw; margin: 0 auto; }
      section.main > div.block-container { max-width: 60vw; margin: 0 auto; }
    </style>
    """,
    unsafe_allow_html=True
)

st.markdown("<h1 style='text-align: center; margin-bottom:0;'>The Number Game</h1>", unsafe_allow_html=True)
st.caption("Take numbers from either end of the sequence; the larger total wins. "
           "Play the minimax computer, then step through the game tree to see why it moves as it does.")

# Session state (play)
if "seq_text" not in st.session_state:      st.session_state.seq_text = ",".join(map(str, DEFAULT_SEQUENCE))
if "starter" not in st.session_state:       st.session_state.starter = "You (Player 1)"
if "ai_strategy" not in st.session_state:   st.session_state.ai_strategy = STRATEGIES[0]
if "runner" not in st.session_state:        st.session_state.runner = _new_runner(DEFAULT_SEQUENCE, st.session_state.starter, st.session_state.ai_strategy)
if "last_metrics" not in st.session_state:  st.session_state.last_metrics = None

# Session state (tree viewer)
if "viz_text" not in st.session_state:      st.session_state.viz_text = ",".join(map(str, DEFAULT_SEQUENCE))
if "viz_speed" not in st.session_state:     st.session_state.viz_speed = 1.0
if "viz_root" not in st.session_state:      _rebuild_viz(DEFAULT_SEQUENCE)

tab_play, tab_viz, tab_learn = st.tabs(["Play Game", "Visualize Algorithm", "Learn Rules"])

# ---- TAB 1: play against the computer ----
with tab_play:
    st.markdown("### Play against the computer")
    c_top = st.columns([1.6, 1.2, 1.4, 0.9])
    with c_top[0]:
        seq_text = st.text_input("Sequence (comma separated)", st.session_state.seq_text, key="play_seq_input")
    with c_top[1]:
        starter = st.radio("Who starts?", ["You (Player 1)", "Computer (Player 2)"],
                           index=0 if st.session_state.starter == "You (Player 1)" else 1)
    with c_top[2]:
        strategy = st.selectbox("Computer strategy", STRATEGIES, index=STRATEGIES.index(st.session_state.ai_strategy))
    with c_top[3]:
        if st.button("New game", key="btn_new_game", use_container_width=True):
            try:
                seq = parse_sequence(seq_text)
                runner = _new_runner(seq, starter, strategy)
            except NumberGameError as e:
                st.error(f"Invalid sequence: {e}")
            else:
                st.session_state.runner = runner
                st.session_state.seq_text = seq_text
                st.session_state.starter = starter
                st.session_state.ai_strategy = strategy
                st.session_state.last_metrics = None
                st.rerun()

    runner: GameRunner = st.session_state.runner
    state = runner.state

    # computer moves on its turn (including the opening move)
    if runner.automated_turn:
        with st.spinner("Computer is thinking…"):
            time.sleep(THINKING_DELAY_S)
            runner.play_automated()
        m = runner.last_search.stats
        st.session_state.last_metrics = {"algorithm": m.algorithm, "visited": m.visited,
                                         "prunes": m.prunes, "time_s": m.time_s}
        st.rerun()

    col_game, col_log = st.columns([1.3, 1.0])

    with col_game:
        st.markdown("#### Sequence")
        if state.sequence:
            st.markdown(" ".join(f"`{v}`" for v in state.sequence))
        else:
            st.markdown("_empty_")

        human_turn = not runner.is_over and runner.to_move is HUMAN
        b_left, b_right = st.columns(2)
        clicked = None
        with b_left:
            if st.button(f"⟵ Take {state.sequence[0]}" if state.sequence else "⟵ Take",
                         key="take_left", use_container_width=True, disabled=not human_turn):
                clicked = Side.LEFT
        with b_right:
            if st.button(f"Take {state.sequence[-1]} ⟶" if state.sequence else "Take ⟶",
                         key="take_right", use_container_width=True, disabled=not human_turn):
                clicked = Side.RIGHT
        if clicked is not None:
            try:
                runner.play(HUMAN, clicked)
            except NumberGameError as e:
                st.error(str(e))
            else:
                st.rerun()

        s1, s2, s3 = st.columns(3)
        s1.metric("Your score", state.score_of(HUMAN))
        s2.metric("Computer score", state.score_of(COMPUTER))
        s3.metric("To move", "—" if runner.is_over else _who(runner.to_move))

        if runner.is_over:
            winner = runner.outcome.winner
            if winner is HUMAN:      st.success("You win! 🎉")
            elif winner is COMPUTER: st.error("Computer wins.")
            else:                    st.info("Tie.")

        if st.session_state.last_metrics:
            m = st.session_state.last_metrics
            st.markdown("#### Last computer move — metrics")
            mc1, mc2, mc3, mc4 = st.columns(4)
            mc1.metric("Algorithm", m["algorithm"])
            mc2.metric("Visited nodes", f"{m['visited']:,}")
            mc3.metric("Prunes", f"{m['prunes']:,}")
            mc4.metric("Time (ms)", f"{m['time_s']*1000:.2f}")

    with col_log:
        st.markdown("#### Move history")
        if runner.history:
            st.table([{"#": i, "Player": _who(r.role), "Side": r.side.value, "Took": r.taken}
                      for i, r in enumerate(runner.history, 1)])
        else:
            st.caption("No moves yet.")

    # ---- Benchmark block ----
    st.divider()
    st.markdown("### Benchmark: Minimax vs Alpha–Beta from this position")
    bench_left, bench_right = st.columns([1, 1])
    with bench_left:
        if st.button("Run benchmark", key="btn_bench", use_container_width=True, disabled=runner.is_over):
            r_mm = best_move(state.sequence, state.score_max, state.score_min, state.to_move, prune=False)
            r_ab = best_move(state.sequence, state.score_max, state.score_min, state.to_move, prune=True)
            st.session_state.bench = {"side": state.to_move, "mm": r_mm, "ab": r_ab}
    with bench_right:
        if "bench" in st.session_state:
            st.write(f"Side to move: **{_who(st.session_state.bench['side'])}**")
            c1, c2 = st.columns(2)
            for col, key, title in ((c1, "mm", "Minimax (no pruning)"), (c2, "ab", "Alpha–Beta")):
                r = st.session_state.bench[key]
                with col:
                    st.markdown(f"**{title}**")
                    st.write(f"Move: {r.move.value if r.move else '—'} | Value: {r.value}")
                    st.write(f"Visited: {r.stats.visited:,} | Prunes: {r.stats.prunes:,}")
                    st.write(f"Time: {r.stats.time_s*1000:.2f} ms")

# ---- TAB 2: game tree playback ----
with tab_viz:
    st.markdown("### Game tree — follow the optimal line")
    g1, g2 = st.columns([3, 1])
    with g1:
        viz_text = st.text_input("Sequence (comma separated)", st.session_state.viz_text, key="viz_seq_input")
    with g2:
        st.write("")
        if st.button("Generate", key="btn_generate", use_container_width=True):
            try:
                _rebuild_viz(parse_sequence(viz_text))
                st.session_state.viz_text = viz_text
            except NumberGameError as e:
                st.error(f"Invalid sequence: {e}")

    path = st.session_state.viz_path
    n1, n2, n3, n4, n5 = st.columns([1, 1, 1, 1, 2])
    with n1:
        if st.button("⟵ Back", use_container_width=True):
            st.session_state.viz_i = max(0, st.session_state.viz_i - 1)
            st.session_state.viz_playing = False
    with n2:
        label = "⏸ Pause" if st.session_state.viz_playing else "▶ Play"
        if st.button(label, use_container_width=True):
            if st.session_state.viz_i >= len(path) - 1:
                st.session_state.viz_i = 0
            st.session_state.viz_playing = not st.session_state.viz_playing
    with n3:
        if st.button("Next ⟶", use_container_width=True):
            st.session_state.viz_i = min(len(path) - 1, st.session_state.viz_i + 1)
            st.session_state.viz_playing = False
    with n4:
        if st.button("Reset", use_container_width=True):
            st.session_state.viz_i = 0
            st.session_state.viz_playing = False
    with n5:
        st.session_state.viz_speed = st.slider("Speed (steps/s)", 0.5, 3.0, st.session_state.viz_speed, 0.5)

    root = st.session_state.viz_root
    current = path[st.session_state.viz_i]
    st.write(f"Step {st.session_state.viz_i + 1} / {len(path)}  ·  {count_nodes(root):,} positions in the full tree")

    fig = draw_game_tree(root, focus=current.path, max_depth=MAX_DIAGRAM_DEPTH,
                         pruned_paths=st.session_state.viz_pruned,
                         title=f"Optimal play — step {st.session_state.viz_i + 1}")
    st.pyplot(fig, use_container_width=True)
    plt.close(fig)

    with st.expander("What is happening at this position?", expanded=True):
        st.markdown(f"**Remaining:** {format_sequence(current.sequence)}  ·  "
                    f"**Scores:** P1 {current.score_max}, P2 {current.score_min}  ·  "
                    f"**Minimax value:** {current.minimax}")
        if current.is_leaf:
            st.markdown("Game over: the value is Player 1's score minus Player 2's score.")
        else:
            goal = "maximise" if current.to_move is Role.MAX else "minimise"
            st.markdown(f"**{current.to_move.label}** to move, trying to {goal} the value.")
            st.table([{"Move": c.move.value, "Takes": c.taken, "Value": c.minimax,
                       "Optimal": "✓" if c.is_optimal else ""} for c in current.children])
            if len(current.optimal_children()) > 1:
                st.info("Both moves are optimal here; the highlighted line takes the left one, "
                        "as the search engine does.")

    with st.expander("Legend"):
        st.markdown(
            "**Node label:** move that produced it, remaining numbers, P1–P2 scores, minimax value.\n\n"
            "**Colors:** Yellow=current, Green=optimal line, Pale green=other optimal moves, "
            "Blue=suboptimal, Grey=skipped by alpha–beta pruning."
        )

# ---- TAB 3: rules and strategy ----
with tab_learn:
    r_tab, s_tab, m_tab = st.tabs(["Rules", "Strategy", "Minimax Algorithm"])
    with r_tab:
        st.markdown(
            "- A sequence of non-negative whole numbers is given (e.g. `[1, 2, 7, 5]`).\n"
            "- Two players take turns.\n"
            "- On each turn a player removes a number from either the left or the right end.\n"
            "- Each player adds up the numbers they removed.\n"
            "- The game ends when no numbers are left; the larger total wins."
        )
    with s_tab:
        st.markdown(
            "Taking the largest end every time is not optimal: a big number now can expose an even "
            "bigger one to your opponent.\n\n"
            "With an even number of entries the first player can always collect either all "
            "even-indexed or all odd-indexed numbers, whichever sum is larger, so they cannot lose. "
            "Optimal play often does even better, and the pattern breaks down for odd lengths."
        )
        even, odd = index_parity_sums(st.session_state.runner.initial_sequence)
        st.markdown(f"For the current game {format_sequence(st.session_state.runner.initial_sequence)}: "
                    f"even-indexed sum **{even}**, odd-indexed sum **{odd}**.")
    with m_tab:
        st.markdown(
            "Minimax explores every line of play assuming both players are optimal. "
            "Each position gets a value: Player 1's score minus Player 2's at the end. "
            "Player 1 picks the move with the larger value, Player 2 the smaller.\n\n"
            "Alpha–beta pruning keeps two bounds: α, what Player 1 can already guarantee, and β, "
            "what Player 2 can. When α ≥ β the remaining move cannot change the result and is skipped. "
            "The value is unchanged; only work is saved (compare them with the benchmark on the Play tab)."
        )

# auto-advance the tree playback
if st.session_state.viz_playing:
    if st.session_state.viz_i < len(st.session_state.viz_path) - 1:
        time.sleep(1.0 / st.session_state.viz_speed)
        st.session_state.viz_i += 1
        st.rerun()
    else:
        st.session_state.viz_playing = False
