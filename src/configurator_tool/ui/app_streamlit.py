"""
Streamlit preview for the product configurator.

Features:
- Answer a category's questions with live visibility rules
- Guarded price estimate with breakdown, as the website would show it
- Catalogue browser
- Definitions lint
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from configurator_tool.config.settings import get_settings
from configurator_tool.data.content_store import ContentStore
from configurator_tool.engine import format_price, format_price_range, is_visible
from configurator_tool.engine.pricing_engine import PricingEngine
from configurator_tool.rules.validate_definitions import validate_site


st.set_page_config(
    page_title="Configurator Preview",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine(ContentStore(get_settings().data_dir))


try:
    engine = get_engine()
    store = engine.store
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


def render_question(question, answers):
    """Render one question and return its answer (None when unanswered)."""
    key = f"q_{question.question_key}"
    label = question.label + (" *" if question.required else "")

    if question.subtitle:
        st.caption(question.subtitle)

    if question.type == 'single-select':
        options = [o for o in question.options or [] if is_visible(o.visibility_rules, answers)]
        labels = {o.value: o.label for o in options}
        return st.selectbox(
            label,
            options=list(labels),
            format_func=lambda v: labels[v],
            index=None,
            key=key,
        )

    if question.type == 'multi-select':
        options = [o for o in question.options or [] if is_visible(o.visibility_rules, answers)]
        labels = {o.value: o.label for o in options}
        return st.multiselect(label, options=list(labels), format_func=lambda v: labels[v], key=key) or None

    if question.type == 'number':
        value = st.number_input(label, min_value=0.0, value=0.0, step=0.5, key=key)
        return value or None

    return st.text_input(label, key=key) or None


# ============================================================================
# SIDEBAR: Site and category
# ============================================================================
with st.sidebar:
    st.header("🏠 Configurator")

    sites = store.list_sites()
    if not sites:
        st.warning(f"No sites found in {store.sites_dir}")
        st.stop()

    settings = get_settings()
    default_index = sites.index(settings.default_site) if settings.default_site in sites else 0
    site = st.selectbox("Site", sites, index=default_index)

    categories = store.get_categories(site)
    slugs = [c['slug'] for c in categories]
    names = {c['slug']: c.get('name', c['slug']) for c in categories}
    category = st.selectbox("Category", slugs, format_func=lambda s: names[s]) if slugs else None

    st.divider()

    if st.button("🔄 Reload definitions"):
        store.invalidate()
        st.rerun()


st.title("Configurator Preview")
st.caption(f"Site: {site} | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2, tab3 = st.tabs(["⚡ Configure", "📚 Catalogue", "🔍 Lint"])


# ============================================================================
# TAB 1: CONFIGURE
# ============================================================================
with tab1:
    if not category:
        st.info("This site has no categories yet.")
    else:
        questions = engine.resolve_questions(category, site)
        col1, col2 = st.columns([1.8, 1.2], gap="large")

        with col1:
            st.subheader(names[category])
            answers = {}
            # Streamlit reruns top to bottom, so earlier answers drive later visibility
            for question in questions:
                if not is_visible(question.visibility_rules, answers):
                    continue
                with st.container(border=True):
                    answer = render_question(question, answers)
                if answer is not None:
                    answers[question.question_key] = answer

        with col2:
            st.subheader("Price Estimate")
            with st.container(border=True):
                result = engine.calculate_guarded(category, answers, site)

                st.metric("Website shows", format_price_range(result.min))
                m1, m2 = st.columns(2)
                m1.metric("Min", format_price(result.min))
                m2.metric("Max", format_price(result.max))

                st.divider()
                breakdown = [
                    {'Line': 'Basisprijs', 'Amount': format_price(result.breakdown.base_min)}
                ] + [
                    {'Line': line.label, 'Amount': format_price(line.amount)}
                    for line in result.breakdown.modifiers
                ]
                st.dataframe(pd.DataFrame(breakdown), use_container_width=True, hide_index=True)

            with st.expander("Answers sent"):
                st.json(answers)


# ============================================================================
# TAB 2: CATALOGUE
# ============================================================================
with tab2:
    st.subheader("📚 Price Catalogue")

    items = store.get_catalogue_items(site)
    search_term = st.text_input("Search Catalogue", placeholder="Name or category...", label_visibility="collapsed")

    catalogue_df = pd.DataFrame([{
        'ID': item.id,
        'Name': item.name,
        'Category': item.category,
        'Unit': item.unit or '',
        'Min': format_price(item.price_min),
        'Max': format_price(item.price_max),
    } for item in items])

    if search_term and not catalogue_df.empty:
        mask = (
            catalogue_df['Name'].str.contains(search_term, case=False, na=False) |
            catalogue_df['Category'].str.contains(search_term, case=False, na=False)
        )
        catalogue_df = catalogue_df[mask]

    st.dataframe(catalogue_df, use_container_width=True, height=500, hide_index=True)
    st.caption(f"Total items: {len(items):,} | Visible: {len(catalogue_df):,}")


# ============================================================================
# TAB 3: LINT
# ============================================================================
with tab3:
    st.subheader("🔍 Definitions Lint")
    report = validate_site(store, site)

    c1, c2 = st.columns(2)
    c1.metric("Errors", len(report.errors))
    c2.metric("Warnings", len(report.warnings))

    for error in report.errors:
        st.error(error)
    for warning in report.warnings:
        st.warning(warning)
    if report.valid and not report.warnings:
        st.success("No problems found")
